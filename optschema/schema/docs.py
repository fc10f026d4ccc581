"""
Documentation Extractor.

Ordered lookup of documentation tags on the blocks attached to declarations
and members. Every function here is a pure read of an immutable block; an
absent block behaves like a block without tags.
"""

import re
from typing import Callable, List, Optional, Pattern, Tuple, Union

from ..declarations.nodes import DocBlock, DocTag


TagSelector = Union[str, Pattern, Callable[[str], bool]]

# @param {type} name - text   |   @param [name=default] text
_PARAM_TAG_RE = re.compile(r"""
    ^(?:\{(?P<type>[^}]*)\}\s*)?
    (?:\[(?P<optional>[^\]=]+)(?:=[^\]]*)?\]|(?P<name>[^\s{\[]+))
    \s*(?:-\s*)?(?P<text>[\s\S]*)$
""", re.VERBOSE)


def get_doc_block(node) -> Optional[DocBlock]:
    """Return the documentation block attached to a declaration or member."""
    return getattr(node, "doc", None)


def _matcher(selector: TagSelector) -> Callable[[str], bool]:
    if isinstance(selector, str):
        return lambda name: name == selector
    if isinstance(selector, re.Pattern):
        return lambda name: selector.search(name) is not None
    if callable(selector):
        return selector
    raise TypeError(f"Unsupported tag selector {selector!r}")


def get_doc_tags(block: Optional[DocBlock], selector: TagSelector) -> List[DocTag]:
    """
    Return the tags of a block whose name matches selector, in document order.

    Args:
        block: The documentation block, or None.
        selector: Exact tag name, compiled pattern (searched in the name), or
            a predicate over tag names.

    Returns:
        Matching tags; empty when nothing matches or block is None.
    """
    if block is None:
        return []
    matches = _matcher(selector)
    return [tag for tag in block.tags if matches(tag.name)]


def get_doc_tag(block: Optional[DocBlock], name: TagSelector, index: int = 0) -> Optional[DocTag]:
    """
    Return the tag at position index among the tags selected by name.

    Negative indexes count from the end (-1 is the last tag). Out of range
    indexes and absent blocks yield None.
    """
    tags = get_doc_tags(block, name)
    if -len(tags) <= index < len(tags):
        return tags[index]
    return None


def get_doc_summary(block: Optional[DocBlock]) -> str:
    """First non-empty line of a block's description, or an empty string."""
    if block is None:
        return ""
    for line in block.description.splitlines():
        if line.strip():
            return line.strip()
    return ""


def parse_param_tag(tag: DocTag) -> Tuple[Optional[str], str]:
    """
    Split a @param tag comment into (parameter name, description text).

        @param {string} foo - desc for foo   ->  ("foo", "desc for foo")
        @param [bar=1] the bar               ->  ("bar", "the bar")
        @param baz                           ->  ("baz", "")
    """
    match = _PARAM_TAG_RE.match(tag.comment.strip())
    if match is None:
        return None, ""
    name = (match.group("optional") or match.group("name") or "").strip()
    return (name or None), match.group("text").strip()


def get_param_doc(block: Optional[DocBlock], name: str) -> Optional[str]:
    """Description text of the @param tag documenting name, if any."""
    for tag in get_doc_tags(block, "param"):
        param_name, text = parse_param_tag(tag)
        if param_name == name:
            return text
    return None
