"""
Derive typed POS candidate fields from OSM node tags.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from domain.models import OsmNode, OsmNodeFields
from services.osm_parser import parse_integer

logger = logging.getLogger(__name__)

# German name first, then English, then the untagged name.
NAME_TAG_PREFERENCE = ("name:de", "name:en", "name")

# Replaced in this order; `&amp;` goes first.
HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&apos;", "'"),
)


def decode_html_entities(text: Optional[str]) -> Optional[str]:
    """
    Decode the five basic HTML entities (e.g. `&amp;` -> `&`).

    `&amp;` is replaced first, so `&amp;lt;` ends up as `<`. Any other
    entity is left as is.
    """
    if text is None:
        return None
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def resolve_name(tags: Mapping[str, str]) -> Optional[str]:
    """Pick the first non-empty name tag by language preference and decode it."""
    for key in NAME_TAG_PREFERENCE:
        value = tags.get(key)
        if value:
            return decode_html_entities(value)
    return None


def parse_postal_code(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    postal_code = parse_integer(value)
    if postal_code is None:
        logger.warning("Failed to parse postal code as integer: %r", value)
    return postal_code


def _optional(tags: Mapping[str, str], key: str) -> Optional[str]:
    # empty strings mean "absent" from here on
    return tags.get(key) or None


def normalize_osm_node(node: OsmNode) -> OsmNodeFields:
    """Map the tags of an OSM node onto the fields a POS is built from."""
    tags = node.tags
    return OsmNodeFields(
        node_id=node.node_id,
        name=resolve_name(tags),
        description=decode_html_entities(_optional(tags, "description")),
        amenity=_optional(tags, "amenity"),
        street=_optional(tags, "addr:street"),
        house_number=_optional(tags, "addr:housenumber"),
        postal_code=parse_postal_code(tags.get("addr:postcode")),
        city=_optional(tags, "addr:city"),
    )
