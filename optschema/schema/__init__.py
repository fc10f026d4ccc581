"""
Declaration-to-Schema Resolution.

Turns command function declarations and options interfaces into fully
resolved, literal-valued option schemas plus the table of external symbols
the generated code must import.

Usage:
    from optschema.schema import build_command_schema, find_paired_options

    schema = build_command_schema(command, find_paired_options(command))
"""

from .literal import (
    StringLiteral,
    NumericLiteral,
    BooleanLiteral,
    QualifiedName,
    parse_literal,
)
from .model import (
    PrimitiveKind,
    Primitive,
    ArrayOf,
    Choice,
    ReferenceKind,
    Reference,
    ReferenceTable,
    OptionSchema,
    OptionsSchema,
    CommandSchema,
)
from .docs import get_doc_block, get_doc_tags, get_doc_tag, get_doc_summary
from .types import POSITIONAL, OPTION, resolve_type
from .members import build_positional_schema, build_option_schema
from .assemble import (
    assert_name_conflict,
    build_command_schema,
    build_options_schema,
    build_source_schemas,
    find_paired_options,
)

__all__ = [
    "StringLiteral",
    "NumericLiteral",
    "BooleanLiteral",
    "QualifiedName",
    "parse_literal",
    "PrimitiveKind",
    "Primitive",
    "ArrayOf",
    "Choice",
    "ReferenceKind",
    "Reference",
    "ReferenceTable",
    "OptionSchema",
    "OptionsSchema",
    "CommandSchema",
    "get_doc_block",
    "get_doc_tags",
    "get_doc_tag",
    "get_doc_summary",
    "POSITIONAL",
    "OPTION",
    "resolve_type",
    "build_positional_schema",
    "build_option_schema",
    "assert_name_conflict",
    "build_command_schema",
    "build_options_schema",
    "build_source_schemas",
    "find_paired_options",
]
