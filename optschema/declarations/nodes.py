"""
Declaration Tree Definitions.

This module defines the read-only trees produced by the declaration parser:
source files, the three declaration kinds the resolver understands
(functions, interfaces and enums), their members, attached documentation
blocks and the small type-expression language used in annotations.

Declarations compare by identity. Every declaration receives an integer
``decl_id`` from its project's counter when it is parsed; references and
reference tables deduplicate on that id, never on names.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


def to_identifier(text: str) -> str:
    """
    camelCase a file stem into an identifier: my-cmd -> myCmd, 2fa -> _2fa.
    """
    parts = [part for part in re.split(r"[^\w$]+", text) if part]
    if not parts:
        return "_"

    ident = parts[0] + "".join(part[:1].upper() + part[1:] for part in parts[1:])
    if ident[0].isdigit():
        ident = f"_{ident}"
    return ident


class ExportKind(Enum):
    """How a declaration is exported from its source file."""
    DEFAULT = "default"     # The sole unnamed export (export default ...)
    NAMED = "named"         # Exported under its own identifier
    NONE = "none"           # Not exported


# =============================================================================
# Documentation
# =============================================================================

@dataclass(frozen=True)
class DocTag:
    """A single `@name comment` annotation inside a documentation block."""
    name: str
    comment: str = ""
    line: int = 0

    def get_comment(self) -> str:
        return self.comment


@dataclass(frozen=True)
class DocBlock:
    """A parsed /** ... */ block: free description text plus ordered tags."""
    description: str = ""
    tags: Tuple[DocTag, ...] = ()
    line: int = 0


# =============================================================================
# Type expressions
# =============================================================================

@dataclass(frozen=True)
class TypeReference:
    """A named type, optionally generic: string, Date, Array<number>, ns.E"""
    name: str
    type_args: Tuple["TypeNode", ...] = ()

    @property
    def display(self) -> str:
        if not self.type_args:
            return self.name
        return f"{self.name}<{', '.join(arg.display for arg in self.type_args)}>"


@dataclass(frozen=True)
class ArrayType:
    """The postfix array form: T[]"""
    element: "TypeNode"

    @property
    def display(self) -> str:
        inner = self.element.display
        if isinstance(self.element, (UnionType, IntersectionType)):
            inner = f"({inner})"
        return f"{inner}[]"


@dataclass(frozen=True)
class UnionType:
    types: Tuple["TypeNode", ...]

    @property
    def display(self) -> str:
        return " | ".join(t.display for t in self.types)


@dataclass(frozen=True)
class IntersectionType:
    types: Tuple["TypeNode", ...]

    @property
    def display(self) -> str:
        return " & ".join(t.display for t in self.types)


@dataclass(frozen=True)
class LiteralType:
    """A string or numeric literal used as a type: 'a' or 42"""
    text: str

    @property
    def display(self) -> str:
        return self.text


@dataclass(frozen=True)
class OpaqueType:
    """Any other type expression (object literal, tuple, function type...), kept as source text."""
    text: str

    @property
    def display(self) -> str:
        return self.text


TypeNode = Union[TypeReference, ArrayType, UnionType, IntersectionType, LiteralType, OpaqueType]


# =============================================================================
# Members
# =============================================================================

@dataclass(eq=False)
class Parameter:  # pylint: disable=too-many-instance-attributes
    """A function parameter: one positional of a command."""
    name: str
    type: Optional[TypeNode] = None
    optional: bool = False          # Marked with `?`
    initializer: Optional[str] = None
    rest: bool = False              # Declared as ...name
    line: int = 0
    parent: Optional["FunctionDeclaration"] = field(default=None, repr=False)

    @property
    def is_optional(self) -> bool:
        """Whether a caller may leave this parameter out."""
        return self.optional or self.rest or self.initializer is not None

    @property
    def doc(self) -> Optional[DocBlock]:
        # Parameters are documented through their function's @param tags
        return None


@dataclass(eq=False)
class PropertySignature:
    """An interface property: one named option."""
    name: str
    type: Optional[TypeNode] = None
    optional: bool = False
    doc: Optional[DocBlock] = None
    line: int = 0
    parent: Optional["InterfaceDeclaration"] = field(default=None, repr=False)

    @property
    def is_optional(self) -> bool:
        return self.optional


@dataclass(eq=False)
class EnumMember:
    name: str
    initializer: Optional[str] = None
    doc: Optional[DocBlock] = None
    line: int = 0


# =============================================================================
# Declarations
# =============================================================================

@dataclass(eq=False)
class Declaration:
    """Fields shared by every top-level declaration."""
    name: Optional[str]
    doc: Optional[DocBlock] = None
    export_kind: ExportKind = ExportKind.NONE
    export_name: Optional[str] = None       # Alias given by `export { name as alias }`
    decl_id: int = 0
    line: int = 0
    source_file: Optional["SourceFile"] = field(default=None, repr=False)

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return self.source_file.stem if self.source_file is not None else "<anonymous>"

    @property
    def exported_name(self) -> Optional[str]:
        """The name other modules import this declaration by."""
        return self.export_name or self.name

    @property
    def binding_name(self) -> str:
        """An identifier generated code can bind this declaration to."""
        return self.name or to_identifier(self.display_name)

    def describe(self) -> str:
        """Human readable location, used in conflict messages."""
        kind = type(self).__name__.replace("Declaration", "").lower()
        where = f"{self.source_file.path}:{self.line}" if self.source_file is not None else f"line {self.line}"
        return f"{kind} '{self.display_name}' at {where}"


@dataclass(eq=False)
class FunctionDeclaration(Declaration):
    """A command: its parameters become positionals."""
    parameters: List[Parameter] = field(default_factory=list)

    @property
    def members(self) -> List[Parameter]:
        return self.parameters


@dataclass(eq=False)
class InterfaceDeclaration(Declaration):
    """An options shape: its properties become named options."""
    properties: List[PropertySignature] = field(default_factory=list)

    @property
    def members(self) -> List[PropertySignature]:
        return self.properties


@dataclass(eq=False)
class EnumDeclaration(Declaration):
    """A closed set of named constants; referenced by `choices`."""
    members: List[EnumMember] = field(default_factory=list)
    const: bool = False


@dataclass(frozen=True)
class ImportDeclaration:
    """import D, { A, B as C } from './module'"""
    module: str
    default_name: Optional[str] = None
    named: Tuple[Tuple[str, str], ...] = ()     # (imported, local)
    namespace: Optional[str] = None
    line: int = 0


@dataclass(eq=False)
class SourceFile:
    """One parsed declaration source."""
    path: str
    functions: List[FunctionDeclaration] = field(default_factory=list)
    interfaces: List[InterfaceDeclaration] = field(default_factory=list)
    enums: List[EnumDeclaration] = field(default_factory=list)
    imports: List[ImportDeclaration] = field(default_factory=list)
    project: Optional[object] = field(default=None, repr=False)

    @property
    def stem(self) -> str:
        base = self.path.replace("\\", "/").rsplit("/", 1)[-1]
        for suffix in (".d.ts", ".tsx", ".ts"):
            if base.endswith(suffix):
                return base[:-len(suffix)]
        return base

    @property
    def declarations(self) -> List[Declaration]:
        decls: List[Declaration] = [*self.functions, *self.interfaces, *self.enums]
        return sorted(decls, key=lambda d: d.decl_id)

    @property
    def default_export(self) -> Optional[Declaration]:
        for decl in self.declarations:
            if decl.export_kind == ExportKind.DEFAULT:
                return decl
        return None

    def get_interface(self, name: str) -> Optional[InterfaceDeclaration]:
        for iface in self.interfaces:
            if iface.name == name:
                return iface
        return None

    def get_enum(self, name: str) -> Optional[EnumDeclaration]:
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None

    def get_type_declaration(self, name: str) -> Optional[Declaration]:
        """Look up a locally declared type (enum or interface) by name."""
        return self.get_enum(name) or self.get_interface(name)

    def get_exported(self, name: str) -> Optional[Declaration]:
        for decl in self.declarations:
            if decl.exported_name == name and decl.export_kind != ExportKind.NONE:
                return decl
        return None
