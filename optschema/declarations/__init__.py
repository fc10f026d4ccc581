"""
Declaration Source.

Reads TypeScript declaration sources (functions, interfaces, enums and the
JSDoc blocks attached to them) into read-only trees for the schema resolver.

Usage:
    from optschema.declarations import Project

    project = Project()
    source  = project.add_source("greet.ts", text)
    command = source.default_export
"""

from .nodes import (
    ExportKind,
    DocBlock,
    DocTag,
    TypeNode,
    TypeReference,
    ArrayType,
    UnionType,
    IntersectionType,
    LiteralType,
    OpaqueType,
    Parameter,
    PropertySignature,
    EnumMember,
    Declaration,
    FunctionDeclaration,
    InterfaceDeclaration,
    EnumDeclaration,
    ImportDeclaration,
    SourceFile,
)
from .parser import parse_source, parse_doc_comment
from .project import Project

__all__ = [
    "ExportKind",
    "DocBlock",
    "DocTag",
    "TypeNode",
    "TypeReference",
    "ArrayType",
    "UnionType",
    "IntersectionType",
    "LiteralType",
    "OpaqueType",
    "Parameter",
    "PropertySignature",
    "EnumMember",
    "Declaration",
    "FunctionDeclaration",
    "InterfaceDeclaration",
    "EnumDeclaration",
    "ImportDeclaration",
    "SourceFile",
    "parse_source",
    "parse_doc_comment",
    "Project",
]
