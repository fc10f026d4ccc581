"""
Type Resolver.

Classifies the declared type of a positional or option into one of the
three shapes a command-line argument framework understands:

    no type / any / unknown       -> Primitive(string)
    string | number | boolean     -> Primitive(kind)
    T[] / Array<T>, T primitive   -> ArrayOf(Primitive(kind))
    enum E { A, B }               -> Choice([E.A, E.B]) plus a Reference to E

Every other type is an UnsupportedTypeError; arrays of anything but a
primitive are an UnsupportedArrayElementError. `undefined` and `null` are
dropped from unions first, so `string | undefined` reads as `string`.
"""

from typing import List, Optional, Tuple

from ..declarations.nodes import (
    ArrayType, EnumDeclaration, ExportKind, TypeNode, TypeReference, UnionType,
)
from ..errors import UnsupportedArrayElementError, UnsupportedTypeError
from ..printer import cons
from ..suggest import suggest_similar
from .literal import Literal, NumericLiteral, parse_value_literal, qualified_name
from .model import (
    ArrayOf, Choice, Primitive, PrimitiveKind, Reference, ReferenceKind,
    TypeDescriptor,
)


POSITIONAL = "positional"
OPTION = "option"

PRIMITIVES = {kind.value: Primitive(kind) for kind in PrimitiveKind}

# Declared types that carry no information; they resolve like a missing type
ANY_TYPES = {"any", "unknown"}

NULLISH_TYPES = {"undefined", "null"}

ARRAY_GENERICS = {"Array"}


def _strip_nullish(node: TypeNode) -> TypeNode:
    if not isinstance(node, UnionType):
        return node
    remaining = tuple(t for t in node.types if not (isinstance(t, TypeReference) and t.name in NULLISH_TYPES))
    if not remaining:
        return node
    if len(remaining) == 1:
        return remaining[0]
    return UnionType(remaining)


def _array_element(node: TypeNode) -> Optional[TypeNode]:
    """Element type of T[] or Array<T>; None if node is not an array."""
    if isinstance(node, ArrayType):
        return node.element
    if isinstance(node, TypeReference) and node.name in ARRAY_GENERICS and len(node.type_args) == 1:
        return node.type_args[0]
    return None


def _primitive(node: TypeNode) -> Optional[Primitive]:
    node = _strip_nullish(node)
    if isinstance(node, TypeReference) and not node.type_args:
        return PRIMITIVES.get(node.name)
    return None


def _lookup_enum(member, node: TypeNode) -> Optional[EnumDeclaration]:
    if not isinstance(node, TypeReference) or node.type_args or "." in node.name:
        return None

    source_file = member.parent.source_file if member.parent is not None else None
    if source_file is None or source_file.project is None:
        return None

    decl = source_file.project.lookup_type(source_file, node.name)
    if isinstance(decl, EnumDeclaration):
        return decl
    return None


def _suggestions(member, node: TypeNode):
    if not isinstance(node, TypeReference):
        return []
    candidates = list(PRIMITIVES)
    source_file = member.parent.source_file if member.parent is not None else None
    if source_file is not None and source_file.project is not None:
        candidates.extend(source_file.project.visible_type_names(source_file))
    return suggest_similar(node.name, candidates)


def make_enum_reference(decl: EnumDeclaration) -> Reference:
    """
    Build the Reference for an enum used as choices.

    The reference keeps the enum's own export classification and points at
    the file declaring the enum, not the file being transformed. An enum
    exported under an alias is imported by that alias and bound to its
    declared name, which the choices use.
    """
    if decl.export_kind == ExportKind.NONE:
        cons.warn(f"enum '{decl.name}' ({decl.source_file.path}) is not exported; "
                  "the generated import will not resolve.")

    if decl.export_kind == ExportKind.DEFAULT:
        return Reference(name=decl.name, export_kind=ReferenceKind.DEFAULT, declaration=decl,
                         source_file=decl.source_file)

    return Reference(name=decl.name, export_kind=ReferenceKind.NAMED, declaration=decl,
                     source_file=decl.source_file, imported_name=decl.export_name)


def enum_member_values(decl: EnumDeclaration) -> Optional[Tuple[Literal, ...]]:
    """
    Runtime values of an enum's members, in declaration order.

    Members without an initializer count up from the previous numeric value
    (or 0). Returns None when an initializer is a computed expression.
    """
    values: List[Literal] = []
    following: Optional[int] = 0

    for member in decl.members:
        if member.initializer is None:
            if following is None:
                return None
            value = NumericLiteral(str(following))
        else:
            value = parse_value_literal(member.initializer)
            if value is None:
                return None

        values.append(value)
        number = value.value if isinstance(value, NumericLiteral) else None
        following = number + 1 if isinstance(number, int) else None

    return tuple(values)


def resolve_enum(decl: EnumDeclaration) -> Tuple[Choice, Reference]:
    """Choices for every enum member, in declaration order."""
    members = tuple(qualified_name(decl.name, member.name) for member in decl.members)
    return Choice(members, enum_member_values(decl)), make_enum_reference(decl)


def resolve_type(member, context: str) -> Tuple[TypeDescriptor, Optional[Reference]]:
    """
    Resolve the declared type of a parameter or property.

    Args:
        member: A Parameter or PropertySignature.
        context: POSITIONAL or OPTION; used in error messages.

    Returns:
        (descriptor, reference) where reference is set only for enums.

    Raises:
        UnsupportedTypeError: The type is not primitive, array or enum.
        UnsupportedArrayElementError: The array element is not a primitive.
    """
    node = member.type
    if node is None:
        return PRIMITIVES["string"], None

    node = _strip_nullish(node)

    if isinstance(node, TypeReference) and node.name in ANY_TYPES and not node.type_args:
        return PRIMITIVES["string"], None

    primitive = _primitive(node)
    if primitive is not None:
        return primitive, None

    element = _array_element(node)
    if element is not None:
        element_primitive = _primitive(element)
        if element_primitive is None:
            raise UnsupportedArrayElementError(context, element.display, member.name)
        return ArrayOf(element_primitive), None

    enum = _lookup_enum(member, node)
    if enum is not None:
        return resolve_enum(enum)

    raise UnsupportedTypeError(context, node.display, _suggestions(member, node))
