"""
Classification of free-text OSM values into closed POS enums.

Both mappings are total: unknown input falls back to a default member and
is logged, never raised. The returned `Classification` remembers the raw
input whenever the default was used.
"""
from __future__ import annotations

import logging
from typing import Optional

from domain.exceptions import InvalidArgumentError
from domain.models import CampusType, Classification, PosType

logger = logging.getLogger(__name__)

AMENITY_TO_POS_TYPE = {
    "cafe": PosType.CAFE,
    "vending_machine": PosType.VENDING_MACHINE,
    "bakery": PosType.BAKERY,
    "cafeteria": PosType.CAFETERIA,
}
DEFAULT_POS_TYPE = PosType.CAFE

POSTAL_CODE_TO_CAMPUS = {
    69117: CampusType.ALTSTADT,
    69115: CampusType.BERGHEIM,
    69120: CampusType.INF,
}
DEFAULT_CAMPUS = CampusType.ALTSTADT


def classify_amenity(amenity: Optional[str]) -> Classification[PosType]:
    """
    Map an OSM amenity value (e.g. "cafe", "bakery") to a PosType.

    Matching is case-insensitive. Unknown amenities map to CAFE.

    Raises:
        InvalidArgumentError: if amenity is None or empty.
    """
    if not amenity:
        raise InvalidArgumentError("Amenity cannot be None or empty")

    pos_type = AMENITY_TO_POS_TYPE.get(amenity.lower())
    if pos_type is None:
        logger.warning("Unknown amenity type '%s', defaulting to %s", amenity, DEFAULT_POS_TYPE.value)
        return Classification(value=DEFAULT_POS_TYPE, defaulted_from=amenity)
    return Classification(value=pos_type)


def classify_postal_code(postal_code: Optional[int]) -> Classification[CampusType]:
    """
    Map a postal code to the campus it belongs to. Unknown codes map to ALTSTADT.

    Raises:
        InvalidArgumentError: if postal_code is None.
    """
    if postal_code is None:
        raise InvalidArgumentError("Postal code cannot be None")

    campus = POSTAL_CODE_TO_CAMPUS.get(postal_code)
    if campus is None:
        logger.warning("Unknown postal code '%s', defaulting to %s", postal_code, DEFAULT_CAMPUS.value)
        return Classification(value=DEFAULT_CAMPUS, defaulted_from=postal_code)
    return Classification(value=campus)


def map_amenity_to_pos_type(amenity: Optional[str]) -> PosType:
    return classify_amenity(amenity).value


def map_postal_code_to_campus_type(postal_code: Optional[int]) -> CampusType:
    return classify_postal_code(postal_code).value
