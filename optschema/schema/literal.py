"""
Literal Parser.

Parses the short text fragments found in documentation tags and enum member
paths into typed literal values that can be embedded directly in a schema:

    "bar"      -> StringLiteral("bar")
    'bar'      -> StringLiteral("bar")
    42, -1.5e3 -> NumericLiteral("42"), NumericLiteral("-1.5e3")
    true       -> BooleanLiteral(True)
    Color.Red  -> QualifiedName(("Color", "Red"))

The grammar is closed: anything else is a DocTagParseError. Fragments are
never evaluated.
"""

import json
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..errors import DocTagParseError


_DOUBLE_QUOTED_RE = re.compile(r'"(?:[^"\\\n]|\\.)*"')
_SINGLE_QUOTED_RE = re.compile(r"'(?:[^'\\\n]|\\.)*'")
_NUMBER_RE = re.compile(r"[+-]?(?:0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_PATH_RE = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")


def _quote(value: str, quote: str) -> str:
    escaped = (value.replace("\\", "\\\\")
                    .replace(quote, f"\\{quote}")
                    .replace("\n", "\\n")
                    .replace("\r", "\\r")
                    .replace("\t", "\\t"))
    return f"{quote}{escaped}{quote}"


@dataclass(frozen=True)
class StringLiteral:
    value: str

    def to_source(self, quote: str = "'") -> str:
        return _quote(self.value, quote)

    def to_python(self):
        return self.value


@dataclass(frozen=True)
class NumericLiteral:
    text: str

    @property
    def value(self) -> Union[int, float]:
        text = self.text.lstrip("+")
        unsigned = text.lstrip("-")
        if unsigned[:2].lower() in ("0x", "0o", "0b"):
            number = int(unsigned, 0)
            return -number if text.startswith("-") else number
        if any(c in unsigned for c in ".eE"):
            return float(text)
        return int(text, 10)

    def to_source(self, quote: str = "'") -> str:  # pylint: disable=unused-argument
        return self.text

    def to_python(self):
        return self.value


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool

    def to_source(self, quote: str = "'") -> str:  # pylint: disable=unused-argument
        return "true" if self.value else "false"

    def to_python(self):
        return self.value


@dataclass(frozen=True)
class QualifiedName:
    """A dotted member access such as Color.Red."""
    parts: Tuple[str, ...]

    def __str__(self) -> str:
        return ".".join(self.parts)

    def to_source(self, quote: str = "'") -> str:  # pylint: disable=unused-argument
        return str(self)

    def to_python(self):
        return str(self)


Literal = Union[StringLiteral, NumericLiteral, BooleanLiteral, QualifiedName]

TRUE = BooleanLiteral(True)


def _requote_escape(match) -> str:
    escape = match.group()
    if escape == "\\'":
        return "'"
    if escape == '"':
        return '\\"'
    return escape


def _decode_string(text: str, tag: Optional[str]) -> str:
    if text[0] == "'":
        # Re-quote as JSON: unescape \' and escape bare double quotes
        inner = re.sub(r"\\.|\"", _requote_escape, text[1:-1])
        text = f'"{inner}"'
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocTagParseError(text, f"invalid string escape ({exc.msg})", tag) from exc


def parse_literal(text: str, tag: Optional[str] = None) -> Literal:
    """
    Parse a literal fragment.

    Args:
        text: A quoted string, a numeric literal or a dotted identifier path.
        tag: Name of the documentation tag the text came from, for messages.

    Returns:
        The typed literal.

    Raises:
        DocTagParseError: If text is none of the recognized forms.
    """
    if text is None or not text.strip():
        raise DocTagParseError(text or "", "expected a value", tag)

    fragment = text.strip()

    if _DOUBLE_QUOTED_RE.fullmatch(fragment) or _SINGLE_QUOTED_RE.fullmatch(fragment):
        return StringLiteral(_decode_string(fragment, tag))

    if _NUMBER_RE.fullmatch(fragment):
        return NumericLiteral(fragment)

    if _PATH_RE.fullmatch(fragment):
        if fragment in ("true", "false"):
            return BooleanLiteral(fragment == "true")
        return QualifiedName(tuple(fragment.split(".")))

    raise DocTagParseError(fragment, "expected a quoted string, a number or a dotted name", tag)


def qualified_name(*parts: str) -> QualifiedName:
    """
    Build a member access path (e.g., Color.Red) through the literal parser,
    so that names which are not plain identifiers are rejected.
    """
    literal = parse_literal(".".join(parts))
    if not isinstance(literal, QualifiedName):
        raise DocTagParseError(".".join(parts), "expected a dotted name")
    return literal


def parse_value_literal(text: str) -> Optional[Literal]:
    """
    Parse a quoted string or a number, such as an enum member initializer.
    Returns None for any other expression.
    """
    fragment = text.strip()

    if _DOUBLE_QUOTED_RE.fullmatch(fragment) or _SINGLE_QUOTED_RE.fullmatch(fragment):
        return StringLiteral(_decode_string(fragment, None))

    if _NUMBER_RE.fullmatch(fragment):
        return NumericLiteral(fragment)

    return None
