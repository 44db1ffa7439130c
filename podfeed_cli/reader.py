"""Read an RSS feed file into a ParsedNode tree.

The tree layout is described in podfeed_cli.tree. Scalar element text is
typed the way feed validation expects: ``true``/``false`` become booleans
and plain decimal numbers become int or float. Attribute values stay
strings, except ``true``/``false`` which become booleans.

Elements that contain a CDATA section keep the raw ``<![CDATA[...]]>``
envelope so its shape can be validated.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from lxml import etree

from podfeed_cli.errors import FeedNotFoundError, FeedParseError
from podfeed_cli.tree import ATTR_PREFIX, TEXT_KEY, FieldValue, ParsedNode

logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"^[+-]?(0|[1-9]\d*)$", re.ASCII)
_FLOAT_PATTERN = re.compile(r"^[+-]?(0|[1-9]\d*)\.\d+$", re.ASCII)

_CDATA_MARKER = "<![CDATA["


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        strip_cdata=False,
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def read_feed(path: Path) -> ParsedNode:
    """Read and parse a feed file.

    Args:
        path: Path to the RSS XML file.

    Returns:
        Root ParsedNode, keyed by the document element name (``rss``).

    Raises:
        FeedNotFoundError: If the file does not exist.
        FeedParseError: If the file is not well-formed XML.
    """
    if not path.is_file():
        raise FeedNotFoundError(str(path))
    logger.debug("Reading feed %s", path)
    return parse_feed(path.read_bytes(), source=str(path))


def parse_feed(content: str | bytes, *, source: str = "<string>") -> ParsedNode:
    """Parse serialized feed XML.

    Args:
        content: XML document as text or bytes.
        source: Name used in error messages.

    Returns:
        Root ParsedNode, keyed by the document element name.

    Raises:
        FeedParseError: If the content is not well-formed XML.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    try:
        root = etree.fromstring(content, parser=_make_parser())
    except etree.XMLSyntaxError as err:
        raise FeedParseError(source, str(err)) from err

    return ParsedNode({_qualified_name(root, root.tag): _convert_element(root, {})})


def _qualified_name(element: Any, name: str) -> str:
    """Turn ``{uri}local`` into ``prefix:local`` using the element's namespaces."""
    qname = etree.QName(name)
    if qname.namespace is None:
        return qname.localname
    for prefix, uri in element.nsmap.items():
        if uri == qname.namespace and prefix is not None:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _scalar(text: str) -> str | int | float | bool:
    if text == "true":
        return True
    if text == "false":
        return False
    if _INT_PATTERN.match(text):
        return int(text)
    if _FLOAT_PATTERN.match(text):
        return float(text)
    return text


def _attribute_value(value: str) -> str | bool:
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _element_text(element: Any) -> str:
    if len(element) == 0 and element.text is None:
        return ""
    serialized = etree.tostring(element, encoding="unicode", with_tail=False)
    start = serialized.find(">") + 1
    end = serialized.rfind("</")
    inner = serialized[start:end] if end >= start else ""
    if _CDATA_MARKER in inner:
        return inner.strip()
    return (element.text or "").strip()


def _convert_element(element: Any, parent_nsmap: dict[str | None, str]) -> FieldValue:
    fields: dict[str, Any] = {}

    for prefix, uri in element.nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            key = f"{ATTR_PREFIX}xmlns" if prefix is None else f"{ATTR_PREFIX}xmlns:{prefix}"
            fields[key] = uri

    for name, value in element.attrib.items():
        fields[f"{ATTR_PREFIX}{_qualified_name(element, name)}"] = _attribute_value(value)

    children: dict[str, list[FieldValue]] = {}
    for child in element:
        if not isinstance(child.tag, str):
            continue
        tag = _qualified_name(child, child.tag)
        children.setdefault(tag, []).append(_convert_element(child, dict(element.nsmap)))

    text = _element_text(element) if not children else (element.text or "").strip()

    if not fields and not children:
        return _scalar(text) if not text.startswith(_CDATA_MARKER) else text

    for tag, values in children.items():
        if len(values) == 1:
            fields[tag] = values[0]
        else:
            fields[tag] = tuple(_as_node(value) for value in values)

    if text:
        fields[TEXT_KEY] = _scalar(text) if not text.startswith(_CDATA_MARKER) else text

    return ParsedNode(fields)


def _as_node(value: FieldValue) -> ParsedNode:
    if isinstance(value, ParsedNode):
        return value
    return ParsedNode({TEXT_KEY: value})
