"""
Parser for OSM API node documents.

The OSM API answers `GET /api/0.6/node/<id>` with a small XML document:

    <osm version="0.6" ...>
      <node id="5589879349" lat="49.4122362" lon="8.7077883" ...>
        <tag k="amenity" v="cafe"/>
        ...
      </node>
    </osm>

`parse_osm_document` turns such a document into an `OsmNode`. It does not
touch the network; anything it cannot make sense of is reported as
`MalformedOsmDocumentError` with a short reason code.
"""
from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, Optional, Union

from domain.exceptions import MalformedOsmDocumentError
from domain.models import OsmNode

logger = logging.getLogger(__name__)

BOM = "\ufeff"
XML_DECLARATION = "<?xml"
OSM_ROOT = "<osm"

# ASCII digits with an optional sign; no whitespace, no "_" separators.
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_integer(value: Optional[str]) -> Optional[int]:
    """Parse a plain decimal integer, or return None if `value` is anything else."""
    if value is None or not _INTEGER_RE.fullmatch(value):
        return None
    return int(value)


def _excerpt(text: str, limit: int = 200) -> str:
    return text[:limit]


def _to_text(content: Union[str, bytes], node_id: int) -> str:
    if isinstance(content, bytes):
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise MalformedOsmDocumentError(node_id, "parse_error", str(exc)) from exc
    return content


def clean_osm_document(content: Union[str, bytes], node_id: int) -> str:
    """
    Strip BOMs and surrounding whitespace, then cut everything before the
    XML declaration (or the <osm> root element if there is no declaration).
    """
    text = _to_text(content, node_id) if content is not None else ""
    text = text.strip()
    while text.startswith(BOM):
        text = text[1:].strip()
        logger.debug("Removed BOM from OSM document for node %s", node_id)

    if not text:
        logger.error("Empty OSM document received for node %s", node_id)
        raise MalformedOsmDocumentError(node_id, "empty")

    start = text.find(XML_DECLARATION)
    if start < 0:
        start = text.find(OSM_ROOT)
    if start < 0:
        logger.error(
            "No XML declaration or <osm> root element in document for node %s. First 200 chars: %s",
            node_id,
            _excerpt(text),
        )
        raise MalformedOsmDocumentError(node_id, "no_root")
    return text[start:]


def _parse_coordinate(element: ET.Element, attribute: str) -> Optional[float]:
    value = element.get(attribute)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning("Failed to parse %s attribute as float: %r", attribute, value)
        return None


def _collect_tags(node_element: ET.Element) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    for tag_element in node_element.iter("tag"):
        key = tag_element.get("k")
        value = tag_element.get("v")
        if key and value:
            tags[key] = value
    return tags


def parse_osm_document(content: Union[str, bytes], node_id: int) -> OsmNode:
    """
    Parse an OSM API document into an OsmNode.

    Args:
        content: Raw response body (text or bytes).
        node_id: The requested node id, used for diagnostics only; the
            returned node carries the id declared in the document.

    Raises:
        MalformedOsmDocumentError: if the document is empty, not XML, has
            no <node> element or the node id is not an integer.
    """
    cleaned = clean_osm_document(content, node_id)
    logger.debug("Parsing cleaned OSM document (first 100 chars): %s", _excerpt(cleaned, 100))

    try:
        root = ET.fromstring(cleaned)
    except ET.ParseError as exc:
        logger.error("Error parsing OSM XML for node %s: %s", node_id, exc)
        raise MalformedOsmDocumentError(node_id, "parse_error", str(exc)) from exc

    node_element = next(root.iter("node"), None)
    if node_element is None:
        logger.error("No node element found in OSM XML for node %s", node_id)
        raise MalformedOsmDocumentError(node_id, "no_node")

    raw_id = node_element.get("id")
    parsed_id = parse_integer(raw_id)
    if parsed_id is None:
        logger.error("Node element for node %s has invalid id %r", node_id, raw_id)
        raise MalformedOsmDocumentError(node_id, "bad_id", repr(raw_id))

    return OsmNode(
        node_id=parsed_id,
        latitude=_parse_coordinate(node_element, "lat"),
        longitude=_parse_coordinate(node_element, "lon"),
        tags=_collect_tags(node_element),
    )
