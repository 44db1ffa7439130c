"""Typed representation of a parsed feed document.

A feed is read into nested ParsedNode objects:

- attributes are keyed ``@_<name>`` (``@_href``, ``@_xmlns:itunes``)
- child elements are keyed by their prefixed tag name (``itunes:image``)
- text next to attributes or children is keyed ``#text``
- a tag that repeats becomes a tuple of nodes, in document order
- an element with neither attributes nor children is its bare text value

Validation code reads the tree only through lookup(), which never raises.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Union

Primitive = Union[str, int, float, bool]
FieldValue = Union[Primitive, "ParsedNode", "tuple[ParsedNode, ...]"]

TEXT_KEY = "#text"
ATTR_PREFIX = "@_"


class _Missing:
    """Sentinel type for a key that is not present at all."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class ParsedNode(Mapping[str, FieldValue]):
    """Read-only element of a parsed feed document."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, FieldValue] | None = None) -> None:
        self._fields: dict[str, FieldValue] = dict(fields or {})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ParsedNode:
        """Build a node tree from plain nested dicts and lists.

        Dicts become nodes, lists become tuples of nodes. A primitive inside
        a list is wrapped as a node holding only ``#text``.
        """
        return cls({key: _convert(value) for key, value in data.items()})

    def __getitem__(self, key: str) -> FieldValue:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ParsedNode({self._fields!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParsedNode):
            return self._fields == other._fields
        if isinstance(other, Mapping):
            return self._fields == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @property
    def attributes(self) -> dict[str, FieldValue]:
        """Attribute values keyed by name without the ``@_`` prefix."""
        return {
            key[len(ATTR_PREFIX) :]: value
            for key, value in self._fields.items()
            if key.startswith(ATTR_PREFIX)
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert back to plain nested dicts and lists."""
        return {key: _to_plain(value) for key, value in self._fields.items()}


def _convert(value: Any) -> FieldValue:
    if isinstance(value, ParsedNode):
        return value
    if isinstance(value, Mapping):
        return ParsedNode.from_mapping(value)
    if isinstance(value, (list, tuple)):
        return tuple(_as_node(member) for member in value)
    return value


def _as_node(value: Any) -> ParsedNode:
    converted = _convert(value)
    if isinstance(converted, ParsedNode):
        return converted
    if isinstance(converted, tuple):
        raise TypeError("Nested sequences cannot be represented in a feed tree")
    return ParsedNode({TEXT_KEY: converted})


def _to_plain(value: FieldValue) -> Any:
    if isinstance(value, ParsedNode):
        return value.to_dict()
    if isinstance(value, tuple):
        return [member.to_dict() for member in value]
    return value


def lookup(node: Any, path: str, default: Any = None) -> Any:
    """Read the value at a dotted path, or ``default`` if any segment is missing.

    Args:
        node: Node to start from. Anything that is not a ParsedNode has no
            children, so every non-empty path resolves to ``default``.
        path: Dotted address such as ``itunes:image.@_href``.
        default: Returned when the path does not resolve.

    Returns:
        The value found at ``path``, or ``default``.

    A sequence is never indexed implicitly: a path running through a
    repeated tag resolves to ``default``. ``#text`` applied to a primitive
    returns that primitive, since an element without attributes or
    children is stored as its bare text.

    Example:
        >>> feed = ParsedNode.from_mapping({"guid": "ep-1"})
        >>> lookup(feed, "guid.#text")
        'ep-1'
    """
    current: Any = node
    for segment in path.split("."):
        if isinstance(current, ParsedNode):
            if segment not in current:
                return default
            current = current[segment]
        elif segment == TEXT_KEY and isinstance(current, (str, int, float, bool)):
            continue
        else:
            return default
    return current


def as_sequence(value: Any) -> tuple[ParsedNode, ...]:
    """Normalize a possibly-repeated tag value to a tuple of nodes.

    None, MISSING and the empty string mean "no element". A single node
    becomes a one-element tuple. Any other primitive is an element with
    bare text and no fields, so it becomes an empty node.
    """
    if value is None or value is MISSING or value == "":
        return ()
    if isinstance(value, tuple):
        return value
    if isinstance(value, ParsedNode):
        return (value,)
    return (ParsedNode(),)


def top_level_segment(path: str) -> str:
    """Return the first segment of a dotted path."""
    return path.split(".", 1)[0]
