"""
Member Schema Builder.

Combines a member's resolved type with what its documentation says into one
OptionSchema. Positionals and named options read their documentation
differently:

- a positional (function parameter) is described by the `@param` tag of its
  function and is required unless its signature marks it optional;
- a named option (interface property) is described by its own block, and
  is required only when tagged `@demandOption`, `@require` or `@required`.
"""

from typing import Dict, Optional, Sequence, Tuple

from ..config import DEFAULT_DEMAND_OPTION_TAGS
from ..declarations.nodes import Parameter, PropertySignature
from ..errors import DocTagParseError
from .docs import get_doc_block, get_doc_summary, get_doc_tag, get_param_doc
from .literal import (
    TRUE, BooleanLiteral, Literal, NumericLiteral, QualifiedName, StringLiteral,
    parse_literal,
)
from .model import (
    ArrayOf, Choice, OptionSchema, Primitive, PrimitiveKind, Reference,
    TypeDescriptor,
)
from .types import OPTION, POSITIONAL, resolve_type


# Positionals carry requiredness as a textual expression
POSITIONAL_DEMAND = StringLiteral("true")

_ALIAS_CHARS = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_")


def make_type_properties(descriptor: TypeDescriptor) -> Dict[str, object]:
    """The type/array/choices fields for a resolved descriptor."""
    if isinstance(descriptor, Primitive):
        return {"type": StringLiteral(descriptor.kind.value)}
    if isinstance(descriptor, ArrayOf):
        return {"type": StringLiteral(descriptor.element.kind.value), "array": TRUE}
    if isinstance(descriptor, Choice):
        return {"choices": descriptor.members}
    raise TypeError(f"Unknown type descriptor {descriptor!r}")


# --- positionals ---

def make_positional_description(param: Parameter) -> Dict[str, StringLiteral]:
    function_doc = get_doc_block(param.parent) if param.parent is not None else None
    text = get_param_doc(function_doc, param.name)
    if not text:
        return {}
    return {"description": StringLiteral(text)}


def make_positional_demand_option(param: Parameter) -> Dict[str, StringLiteral]:
    if param.is_optional:
        return {}
    return {"demand_option": POSITIONAL_DEMAND}


def build_positional_schema(param: Parameter) -> Tuple[OptionSchema, Optional[Reference]]:
    """
    Build the schema of one function parameter.

    Raises:
        UnsupportedTypeError, UnsupportedArrayElementError: From the resolver.
    """
    descriptor, ref = resolve_type(param, POSITIONAL)
    schema = OptionSchema(
        name=param.name,
        variadic=param.rest,
        **make_type_properties(descriptor),
        **make_positional_description(param),
        **make_positional_demand_option(param),
    )
    return schema, ref


# --- options ---

def make_option_description(prop: PropertySignature) -> Dict[str, StringLiteral]:
    summary = get_doc_summary(get_doc_block(prop))
    if not summary:
        return {}
    return {"description": StringLiteral(summary)}


def parse_alias(text: str) -> StringLiteral:
    """The @alias text as a plain string; quoted text is unquoted first."""
    fragment = text.strip()
    if fragment[:1] in ("'", '"'):
        literal = parse_literal(fragment, "alias")
        if not isinstance(literal, StringLiteral):
            raise DocTagParseError(fragment, "expected an alias name", "alias")
        fragment = literal.value
    if not fragment or not set(fragment) <= _ALIAS_CHARS:
        raise DocTagParseError(fragment, "expected an alias name", "alias")
    return StringLiteral(fragment)


def check_default(literal: Literal, descriptor: TypeDescriptor, text: str) -> Literal:
    """
    Reject a @default literal whose kind contradicts the option's type.

    A choices default is either a member path (E.A) or, when every member
    value is a plain literal, one of those values ('a').
    """
    if isinstance(descriptor, Choice):
        if isinstance(literal, QualifiedName) and literal not in descriptor.members:
            raise DocTagParseError(text, "not one of the declared choices", "default")
        if isinstance(literal, (StringLiteral, NumericLiteral)) and descriptor.values is not None:
            values = [value.to_python() for value in descriptor.values if isinstance(value, type(literal))]
            if literal.to_python() not in values:
                raise DocTagParseError(text, "not one of the declared choice values", "default")
        return literal

    kind = descriptor.element.kind if isinstance(descriptor, ArrayOf) else descriptor.kind
    expected = {
        PrimitiveKind.STRING: StringLiteral,
        PrimitiveKind.NUMBER: NumericLiteral,
        PrimitiveKind.BOOLEAN: BooleanLiteral,
    }[kind]
    if not isinstance(literal, expected):
        raise DocTagParseError(text, f"expected a {kind.value} literal", "default")
    return literal


def make_option_tags(prop: PropertySignature, descriptor: TypeDescriptor,
                     demand_option_tags: Sequence[str] = DEFAULT_DEMAND_OPTION_TAGS) -> Dict[str, Literal]:
    """The alias/default/demandOption fields read from a property's tags."""
    block = get_doc_block(prop)
    result: Dict[str, Literal] = {}

    alias = get_doc_tag(block, "alias")
    if alias is not None:
        result["alias"] = parse_alias(alias.comment)

    default = get_doc_tag(block, "default")
    if default is not None:
        literal = parse_literal(default.comment, "default")
        result["default"] = check_default(literal, descriptor, default.comment)

    for tag_name in demand_option_tags:
        if get_doc_tag(block, tag_name) is not None:
            result["demand_option"] = TRUE
            break

    return result


def build_option_schema(prop: PropertySignature,
                        demand_option_tags: Sequence[str] = DEFAULT_DEMAND_OPTION_TAGS,
                        ) -> Tuple[OptionSchema, Optional[Reference]]:
    """
    Build the schema of one interface property.

    Raises:
        UnsupportedTypeError, UnsupportedArrayElementError: From the resolver.
        DocTagParseError: On an unreadable @alias or @default.
    """
    descriptor, ref = resolve_type(prop, OPTION)
    schema = OptionSchema(
        name=prop.name,
        **make_type_properties(descriptor),
        **make_option_description(prop),
        **make_option_tags(prop, descriptor, demand_option_tags),
    )
    return schema, ref
