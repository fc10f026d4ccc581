"""
Render command schemas as plain data.

The result only contains str/int/float/bool/list/dict values, so it can be
dumped as YAML or JSON for inspection.
"""

from typing import Any, Dict, List

from ..schema.model import CommandSchema, OptionSchema, ReferenceTable


def option_to_dict(schema: OptionSchema) -> Dict[str, Any]:
    properties = {}
    for key, value in schema.properties().items():
        if isinstance(value, tuple):
            properties[key] = [item.to_python() for item in value]
        else:
            properties[key] = value.to_python()

    result: Dict[str, Any] = {"name": schema.name, "properties": properties}
    if schema.variadic:
        result["variadic"] = True
    return result


def references_to_dict(table: ReferenceTable) -> Dict[str, Dict[str, List[str]]]:
    return {
        source_file.path: {
            "default": [ref.name for ref in group.default],
            "named": [ref.name for ref in group.named],
        }
        for source_file, group in table.items()
    }


def schema_to_dict(schema: CommandSchema) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "name": schema.name,
        "description": schema.description.value,
        "positionals": [option_to_dict(pos) for pos in schema.positionals],
        "options": [option_to_dict(opt) for opt in schema.options],
        "references": references_to_dict(schema.references),
    }
    if schema.command is not None:
        result["command"] = {
            "name": schema.command.name,
            "export": schema.command.export_kind.value,
            "source": schema.command.source_file.path,
        }
        if schema.command.imported_name:
            result["command"]["export_name"] = schema.command.imported_name
    return result
