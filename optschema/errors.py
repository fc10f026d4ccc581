"""
Error Taxonomy and Message Formatting.

Every failure raised while resolving declarations into option schemas is a
build-time documentation or typing error: it is fatal, never retried, and no
partial schema is returned alongside it.

Error Message Format
--------------------
All error messages follow this structure:
- Symbol names in single quotes: 'foo'
- Where the symbol appears (positional, option, file:line)
- Clear description of the problem
- "Did you mean" suggestions when available

Examples:
- "Unsupported positional type 'Date'"
- "Unsupported array element type 'Date' in option 'when'"
- "Name 'verbose' is used by both a positional and an option"
"""

from typing import Optional, Sequence

from .common import OptSchemaException


def format_name(name: str) -> str:
    """Format a symbol name for error messages."""
    return f"'{name}'"


def with_suggestions(base_msg: str, suggestions: Optional[Sequence[str]] = None) -> str:
    """
    Append "Did you mean?" to a message if suggestions are available.

    Args:
        base_msg: The message without suggestions.
        suggestions: Optional list of similar valid names.

    Returns:
        Formatted error message.
    """
    if suggestions:
        if len(suggestions) == 1:
            return f"{base_msg}. Did you mean {format_name(suggestions[0])}?"
        quoted = [format_name(s) for s in suggestions]
        return f"{base_msg}. Did you mean one of: {', '.join(quoted)}?"
    return base_msg


def unsupported_type_message(context: str, type_name: str,
                             suggestions: Optional[Sequence[str]] = None) -> str:
    return with_suggestions(f"Unsupported {context} type {format_name(type_name)}", suggestions)


def unsupported_array_element_message(context: str, element_name: str,
                                      member: Optional[str] = None) -> str:
    where = f" in {context} {format_name(member)}" if member else f" in {context}"
    return f"Unsupported array element type {format_name(element_name)}{where}"


def positional_option_conflict_message(names: Sequence[str]) -> str:
    if len(names) == 1:
        return f"Name {format_name(names[0])} is used by both a positional and an option"
    quoted = [format_name(n) for n in names]
    return f"Names {', '.join(quoted)} are used by both positionals and options"


def symbol_conflict_message(name: str, first: str, second: str) -> str:
    return (
        f"Identifier {format_name(name)} refers to two different declarations "
        f"({first} and {second}); the generated imports would be ambiguous"
    )


class UnsupportedTypeError(OptSchemaException):
    """A member's declared type is not a primitive, primitive array or enum."""

    def __init__(self, context: str, type_name: str, suggestions: Optional[Sequence[str]] = None):
        self.context     = context
        self.type_name   = type_name
        self.suggestions = list(suggestions or [])
        super().__init__(unsupported_type_message(context, type_name, self.suggestions))


class UnsupportedArrayElementError(OptSchemaException):
    """An array member's element type is not a supported primitive."""

    def __init__(self, context: str, element_name: str, member: Optional[str] = None):
        self.context      = context
        self.element_name = element_name
        self.member       = member
        super().__init__(unsupported_array_element_message(context, element_name, member))


class NameConflictError(OptSchemaException):
    """Two symbols of one generated command share an identifier."""

    def __init__(self, message: str, names: Sequence[str]):
        self.names = list(names)
        super().__init__(message)


class DocTagParseError(OptSchemaException):
    """A documentation tag's text is not a recognized literal form."""

    def __init__(self, text: str, reason: str, tag: Optional[str] = None):
        self.text   = text
        self.reason = reason
        self.tag    = tag
        where = f"@{tag} " if tag else ""
        super().__init__(f"Cannot parse {where}text {format_name(text)}: {reason}")


class DeclarationSyntaxError(OptSchemaException):
    """The declaration source could not be parsed."""

    def __init__(self, message: str, path: str, line: int, column: int):
        self.path   = path
        self.line   = line
        self.column = column
        super().__init__(f"{path}:{line}:{column}: {message}")
