"""
Option Schema Dataclass Definitions.

This module defines the values produced by the resolver and handed to the
emitter: resolved type descriptors, references to external declarations,
the per-file reference table, and the option/command schemas themselves.

All values are computed once per declaration and never mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple, Union

from collections.abc import Mapping as MappingABC

from ..declarations.nodes import Declaration, SourceFile
from .literal import BooleanLiteral, Literal, QualifiedName, StringLiteral


# =============================================================================
# Type descriptors
# =============================================================================

class PrimitiveKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind


@dataclass(frozen=True)
class ArrayOf:
    element: Primitive


@dataclass(frozen=True)
class Choice:
    members: Tuple[QualifiedName, ...]
    # Runtime member values; None when an initializer is not a plain literal
    values: Optional[Tuple[Literal, ...]] = field(default=None, compare=False)


TypeDescriptor = Union[Primitive, ArrayOf, Choice]


# =============================================================================
# References
# =============================================================================

class ReferenceKind(Enum):
    """Import syntax the emitter must use for a referenced symbol."""
    DEFAULT = "default"
    NAMED = "named"


@dataclass(frozen=True, eq=False)
class Reference:
    """
    A symbol generated code must import.

    Identity is the referenced declaration, not the name: two references
    looked up independently for the same declaration are equal.
    """
    name: str
    export_kind: ReferenceKind
    declaration: Declaration = field(repr=False)
    source_file: SourceFile = field(repr=False)
    imported_name: Optional[str] = None     # Exported name, when it differs from `name`

    @property
    def decl_id(self) -> int:
        return self.declaration.decl_id

    def __eq__(self, other) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return self.declaration is other.declaration

    def __hash__(self) -> int:
        return hash(self.decl_id)


@dataclass
class ReferenceGroup:
    default: List[Reference] = field(default_factory=list)
    named: List[Reference] = field(default_factory=list)

    def __iter__(self) -> Iterator[Reference]:
        yield from self.default
        yield from self.named


class ReferenceTableFrozenError(RuntimeError):
    """Raised when attempting to modify a frozen reference table."""


class ReferenceTable(MappingABC):
    """
    Mapping from source file to the references declared in it.

    References are deduplicated by declaration identity and kept in insertion
    order. The assembler freezes a table before handing it out; after that,
    add() raises ReferenceTableFrozenError.
    """

    def __init__(self):
        self._groups: Dict[SourceFile, ReferenceGroup] = {}
        self._seen: Dict[int, Reference] = {}
        self._frozen: bool = False

    def __getitem__(self, source_file: SourceFile) -> ReferenceGroup:
        return self._groups[source_file]

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        return f"ReferenceTable({ {sf.path: [r.name for r in g] for sf, g in self._groups.items()} })"

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "ReferenceTable":
        """Make the table read-only. Idempotent."""
        if not self._frozen:
            self._frozen = True
            self._groups = MappingProxyType(self._groups)
        return self

    def add(self, ref: Optional[Reference]) -> None:
        """Add a reference unless its declaration is already present."""
        if ref is None:
            return
        if self._frozen:
            raise ReferenceTableFrozenError(f"Cannot add '{ref.name}': reference table is frozen")
        if ref.decl_id in self._seen:
            return

        self._seen[ref.decl_id] = ref
        group = self._groups.setdefault(ref.source_file, ReferenceGroup())
        if ref.export_kind == ReferenceKind.DEFAULT:
            group.default.append(ref)
        else:
            group.named.append(ref)

    def merge(self, other: "ReferenceTable") -> None:
        for ref in other.references():
            self.add(ref)

    def references(self) -> List[Reference]:
        """Every reference, grouped by file, default imports first."""
        return [ref for group in self._groups.values() for ref in group]

    def __contains__(self, item) -> bool:
        if isinstance(item, Reference):
            return item.decl_id in self._seen
        return item in self._groups


# =============================================================================
# Schemas
# =============================================================================

SCHEMA_KEYS = ("type", "array", "choices", "description", "alias", "default", "demandOption")


@dataclass(frozen=True)
class OptionSchema:  # pylint: disable=too-many-instance-attributes
    """
    The resolved configuration of one positional or named option.

    Exactly one of `type`/`choices` is set; `array` only accompanies `type`.
    """
    name: str
    type: Optional[StringLiteral] = None
    array: Optional[BooleanLiteral] = None
    choices: Optional[Tuple[QualifiedName, ...]] = None
    description: Optional[StringLiteral] = None
    alias: Optional[StringLiteral] = None
    default: Optional[Literal] = None
    demand_option: Optional[Literal] = None
    variadic: bool = False     # Rest parameter: collects every remaining argument

    def __post_init__(self):
        if (self.type is None) == (self.choices is None):
            raise ValueError(f"Option '{self.name}' needs exactly one of type/choices")
        if self.array is not None and self.choices is not None:
            raise ValueError(f"Option '{self.name}' cannot combine array with choices")

    def properties(self) -> Dict[str, Union[Literal, Tuple[QualifiedName, ...]]]:
        """The present configuration fields, in emit order, under their yargs names."""
        values = {
            "type": self.type,
            "array": self.array,
            "choices": self.choices,
            "description": self.description,
            "alias": self.alias,
            "default": self.default,
            "demandOption": self.demand_option,
        }
        return {key: values[key] for key in SCHEMA_KEYS if values[key] is not None}


@dataclass(frozen=True)
class OptionsSchema:
    """Result of the options pass over one interface."""
    name: str
    options: Tuple[OptionSchema, ...] = ()
    references: ReferenceTable = field(default_factory=ReferenceTable)


@dataclass(frozen=True)
class CommandSchema:
    """
    Everything the emitter needs for one command.

    `references` holds the symbols the schema's choices depend on; the
    command's own declaration is kept apart in `command`.
    """
    name: str
    description: StringLiteral
    positionals: Tuple[OptionSchema, ...] = ()
    options: Tuple[OptionSchema, ...] = ()
    references: ReferenceTable = field(default_factory=ReferenceTable)
    command: Optional[Reference] = None

    def get_positional(self, name: str) -> Optional[OptionSchema]:
        for pos in self.positionals:
            if pos.name == name:
                return pos
        return None

    def get_option(self, name: str) -> Optional[OptionSchema]:
        for opt in self.options:
            if opt.name == name:
                return opt
        return None
