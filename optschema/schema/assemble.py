"""
Command/Options Assembler.

Builds the complete schema of a command from its function declaration and,
when present, the options interface paired with it:

1. name and description of the command
2. one positional per parameter, collecting enum references per source file
3. the options pass over the paired interface
4. positional and option names must be disjoint
5. the command name and every referenced symbol must be distinct identifiers

Nothing is returned on failure; every error is fatal for the declaration.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..config import DEFAULT_CONFIG, OptSchemaConfig
from ..declarations.nodes import (
    Declaration, ExportKind, FunctionDeclaration, InterfaceDeclaration, SourceFile,
)
from ..errors import (
    NameConflictError, positional_option_conflict_message, symbol_conflict_message,
)
from .docs import get_doc_block, get_doc_summary
from .literal import StringLiteral
from .members import build_option_schema, build_positional_schema
from .model import (
    CommandSchema, OptionSchema, OptionsSchema, Reference, ReferenceKind,
    ReferenceTable,
)


def get_command_description(decl: Declaration) -> StringLiteral:
    """First line of the declaration's own description; '' without docs."""
    return StringLiteral(get_doc_summary(get_doc_block(decl)))


def make_declaration_reference(decl: Declaration) -> Reference:
    """
    The command's own Reference. An anonymous default export is bound to an
    identifier derived from its file stem (my-cmd.ts -> myCmd).
    """
    if decl.export_kind == ExportKind.DEFAULT:
        return Reference(name=decl.binding_name, export_kind=ReferenceKind.DEFAULT, declaration=decl,
                         source_file=decl.source_file)

    return Reference(name=decl.binding_name, export_kind=ReferenceKind.NAMED, declaration=decl,
                     source_file=decl.source_file, imported_name=decl.export_name)


def assert_name_conflict(positionals: Sequence[Tuple[str, object]],
                         options: Sequence[Tuple[str, object]]) -> None:
    """
    Fail if a name is used by both a positional and an option.

    Args:
        positionals: (name, schema) pairs.
        options: (name, schema) pairs.

    Raises:
        NameConflictError: Listing every shared name, in positional order.
    """
    option_names = {name for name, _ in options}
    conflicts = [name for name, _ in positionals if name in option_names]
    if conflicts:
        raise NameConflictError(positional_option_conflict_message(conflicts), conflicts)


def assert_unique_symbols(command: Optional[Reference], references: ReferenceTable) -> None:
    """
    Fail if one identifier would import two different declarations.

    The command's own name and every reference name share one namespace in
    the generated module.
    """
    seen: Dict[str, Reference] = {}
    symbols: List[Reference] = ([command] if command is not None else []) + references.references()

    for ref in symbols:
        other = seen.get(ref.name)
        if other is not None and other != ref:
            raise NameConflictError(
                symbol_conflict_message(ref.name, other.declaration.describe(), ref.declaration.describe()),
                [ref.name],
            )
        seen[ref.name] = ref


def build_options_schema(decl: InterfaceDeclaration,
                         config: OptSchemaConfig = DEFAULT_CONFIG) -> OptionsSchema:
    """
    The options pass: one named option per interface property.

    Raises:
        UnsupportedTypeError, UnsupportedArrayElementError, DocTagParseError.
    """
    references = ReferenceTable()
    options: List[OptionSchema] = []

    for prop in decl.properties:
        schema, ref = build_option_schema(prop, config.resolve.demand_option_tags)
        options.append(schema)
        references.add(ref)

    return OptionsSchema(name=decl.name, options=tuple(options), references=references.freeze())


def find_paired_options(command: FunctionDeclaration,
                        config: OptSchemaConfig = DEFAULT_CONFIG) -> Optional[InterfaceDeclaration]:
    """
    The options interface of a command: `<Command>Options` in the command's
    file, or else the interface named by config (default `Options`).
    """
    source_file = command.source_file
    if source_file is None:
        return None

    candidates = []
    if command.name:
        candidates.append(f"{command.name[:1].upper()}{command.name[1:]}Options")
    candidates.append(config.resolve.options_interface)

    for name in candidates:
        iface = source_file.get_interface(name)
        if iface is not None:
            return iface
    return None


def build_command_schema(decl: FunctionDeclaration,
                         options: Optional[InterfaceDeclaration] = None,
                         config: OptSchemaConfig = DEFAULT_CONFIG) -> CommandSchema:
    """
    Build the schema of one command.

    Args:
        decl: The command's function declaration.
        options: The paired options interface, if any.
        config: Resolver configuration.

    Returns:
        The immutable CommandSchema.

    Raises:
        UnsupportedTypeError, UnsupportedArrayElementError, DocTagParseError,
        NameConflictError.
    """
    references = ReferenceTable()
    positionals: List[OptionSchema] = []

    for param in decl.parameters:
        schema, ref = build_positional_schema(param)
        positionals.append(schema)
        references.add(ref)

    option_schemas: Tuple[OptionSchema, ...] = ()
    if options is not None:
        options_schema = build_options_schema(options, config)
        option_schemas = options_schema.options
        references.merge(options_schema.references)

    assert_name_conflict(
        [(p.name, p) for p in positionals],
        [(o.name, o) for o in option_schemas],
    )

    command = make_declaration_reference(decl)
    assert_unique_symbols(command, references)

    return CommandSchema(
        name=decl.display_name,
        description=get_command_description(decl),
        positionals=tuple(positionals),
        options=option_schemas,
        references=references.freeze(),
        command=command,
    )


def build_source_schemas(source_file: SourceFile,
                         config: OptSchemaConfig = DEFAULT_CONFIG) -> List[CommandSchema]:
    """One CommandSchema per exported function of a file, default export first."""
    functions = [f for f in source_file.functions if f.export_kind != ExportKind.NONE]
    functions.sort(key=lambda f: (f.export_kind != ExportKind.DEFAULT, f.decl_id))
    return [build_command_schema(func, find_paired_options(func, config), config) for func in functions]
