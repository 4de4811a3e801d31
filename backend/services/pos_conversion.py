"""
Conversion of OSM nodes into POS domain objects.

normalize tags -> check required fields -> classify type/campus -> build Pos
"""
from __future__ import annotations

from typing import List

from domain.exceptions import OsmNodeMissingFieldsError
from domain.models import CampusType, OsmNode, OsmNodeFields, Pos, PosType
from services.osm_fields import normalize_osm_node
from services.pos_classification import classify_amenity, classify_postal_code

REQUIRED_STRING_FIELDS = ("name", "amenity", "street", "house_number")


def missing_required_fields(fields: OsmNodeFields) -> List[str]:
    """Names of all required fields that are absent, in declaration order."""
    missing = [name for name in REQUIRED_STRING_FIELDS if not getattr(fields, name)]
    if fields.postal_code is None:
        missing.append("postal_code")
    if not fields.city:
        missing.append("city")
    return missing


def validate_required_fields(fields: OsmNodeFields) -> None:
    """
    Raises:
        OsmNodeMissingFieldsError: if name, amenity, street, house number,
            postal code or city is absent (or an empty string).
    """
    missing = missing_required_fields(fields)
    if missing:
        raise OsmNodeMissingFieldsError(fields.node_id, missing)


def build_pos(fields: OsmNodeFields, pos_type: PosType, campus: CampusType) -> Pos:
    """Assemble an unsaved Pos; no validation happens here."""
    return Pos(
        name=fields.name,
        description=fields.description if fields.description is not None else "",
        type=pos_type,
        campus=campus,
        street=fields.street,
        house_number=fields.house_number,
        postal_code=fields.postal_code,
        city=fields.city,
    )


def convert_osm_node_to_pos(node: OsmNode) -> Pos:
    """
    Convert an OSM node into a Pos without identity.

    Unknown amenities and postal codes fall back to CAFE / ALTSTADT.

    Raises:
        OsmNodeMissingFieldsError: if a required field is missing.
    """
    fields = normalize_osm_node(node)
    validate_required_fields(fields)
    pos_type = classify_amenity(fields.amenity).value
    campus = classify_postal_code(fields.postal_code).value
    return build_pos(fields, pos_type, campus)
