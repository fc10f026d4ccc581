"""
Generate yargs command modules from command schemas.

The generated module imports every referenced symbol (default or named
import syntax, following each reference's export kind), embeds each
positional and option schema as an object literal, and exports the pieces of
a yargs command module:

    import greet from './greet'
    import { Color } from './color'

    export const command = 'greet <name> [times]'
    export const describe = 'Greets someone.'
    export const positionals = {
      name: { type: 'string', description: 'who to greet', demandOption: 'true' },
    }
    export const options = {
      color: { choices: [Color.Red, Color.Green] },
    }
    export const handler = (argv) => greet(argv.name, argv.times, argv)
"""

import posixpath
import re
from typing import Dict, List, Optional, Sequence

from ..config import DEFAULT_CONFIG, Emit
from ..declarations.nodes import SourceFile
from ..schema.model import CommandSchema, OptionSchema, Reference, ReferenceKind


_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")

_TS_SUFFIXES = (".d.ts", ".tsx", ".ts")


def module_specifier(module_path: str, source_file: SourceFile) -> str:
    """Relative import specifier from the generated module to a source file."""
    target = source_file.path
    for suffix in _TS_SUFFIXES:
        if target.endswith(suffix):
            target = target[:-len(suffix)]
            break

    rel = posixpath.relpath(target, posixpath.dirname(module_path) or ".")
    if not rel.startswith("."):
        rel = f"./{rel}"
    return rel


def _group_references(schema: CommandSchema) -> Dict[SourceFile, List[Reference]]:
    groups: Dict[SourceFile, List[Reference]] = {}
    if schema.command is not None:
        groups.setdefault(schema.command.source_file, []).append(schema.command)
    for ref in schema.references.references():
        refs = groups.setdefault(ref.source_file, [])
        if ref not in refs:
            refs.append(ref)
    return groups


def _import_specifier(ref: Reference) -> str:
    """`Name`, or `Exported as Name` for a declaration exported under an alias."""
    if ref.imported_name and ref.imported_name != ref.name:
        return f"{ref.imported_name} as {ref.name}"
    return ref.name


def generate_imports(schema: CommandSchema, module_path: str, emit: Emit = DEFAULT_CONFIG.emit) -> List[str]:
    """One import statement per referenced source file."""
    lines = []
    for source_file, refs in _group_references(schema).items():
        defaults = [ref.name for ref in refs if ref.export_kind == ReferenceKind.DEFAULT]
        named = [_import_specifier(ref) for ref in refs if ref.export_kind == ReferenceKind.NAMED]

        clauses = []
        if defaults:
            clauses.append(defaults[0])
        if named:
            clauses.append(f"{{ {', '.join(named)} }}")

        specifier = module_specifier(module_path, source_file)
        lines.append(f"import {', '.join(clauses)} from {emit.quote}{specifier}{emit.quote}")
    return lines


def _property_key(name: str, quote: str) -> str:
    if _IDENTIFIER_RE.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace(quote, f"\\{quote}")
    return f"{quote}{escaped}{quote}"


def render_value(value, quote: str = "'") -> str:
    if isinstance(value, tuple):
        return f"[{', '.join(item.to_source(quote) for item in value)}]"
    return value.to_source(quote)


def render_option_literal(schema: OptionSchema, quote: str = "'") -> str:
    """An OptionSchema as a yargs configuration object literal."""
    fields = [f"{key}: {render_value(value, quote)}" for key, value in schema.properties().items()]
    return f"{{ {', '.join(fields)} }}"


def _render_table(name: str, schemas: Sequence[OptionSchema], emit: Emit) -> List[str]:
    if not schemas:
        return [f"export const {name} = {{}}"]

    pad = " " * emit.indent
    lines = [f"export const {name} = {{"]
    for schema in schemas:
        lines.append(f"{pad}{_property_key(schema.name, emit.quote)}: {render_option_literal(schema, emit.quote)},")
    lines.append("}")
    return lines


def command_string(schema: CommandSchema) -> str:
    """The yargs command string: required as <name>, optional as [name]."""
    parts = [schema.name]
    for pos in schema.positionals:
        name = f"{pos.name}.." if pos.variadic else pos.name
        parts.append(f"<{name}>" if pos.demand_option is not None else f"[{name}]")
    return " ".join(parts)


def _argv_access(name: str, quote: str) -> str:
    if _IDENTIFIER_RE.match(name):
        return f"argv.{name}"
    return f"argv[{_property_key(name, quote)}]"


def _handler(schema: CommandSchema, emit: Emit) -> Optional[str]:
    if schema.command is None:
        return None

    args = []
    for pos in schema.positionals:
        access = _argv_access(pos.name, emit.quote)
        args.append(f"...{access}" if pos.variadic else access)
    if schema.options:
        args.append("argv")
    return f"export const handler = (argv) => {schema.command.name}({', '.join(args)})"


def generate_command_module(schema: CommandSchema, module_path: str,
                            emit: Emit = DEFAULT_CONFIG.emit) -> str:
    """
    Render the yargs command module for one command.

    Args:
        schema: The resolved command schema.
        module_path: Where the module will live; import specifiers are
            relative to it.
        emit: Output formatting configuration.

    Returns:
        Module source text, newline terminated.
    """
    quote = emit.quote
    lines = generate_imports(schema, module_path, emit)
    if lines:
        lines.append("")

    lines.append(f"export const command = {quote}{command_string(schema)}{quote}")
    lines.append(f"export const describe = {schema.description.to_source(quote)}")
    lines.extend(_render_table("positionals", schema.positionals, emit))
    lines.extend(_render_table("options", schema.options, emit))

    handler = _handler(schema, emit)
    if handler is not None:
        lines.append(handler)

    return "\n".join(lines) + "\n"
