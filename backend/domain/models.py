"""
Core domain models for the Campus Coffee backend.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Generic, Optional, TypeVar


class PosType(str, Enum):
    """Kind of point of sale."""
    CAFE = "CAFE"
    VENDING_MACHINE = "VENDING_MACHINE"
    BAKERY = "BAKERY"
    CAFETERIA = "CAFETERIA"


class CampusType(str, Enum):
    """Heidelberg University campus a point of sale belongs to."""
    ALTSTADT = "ALTSTADT"
    BERGHEIM = "BERGHEIM"
    INF = "INF"  # Im Neuenheimer Feld


@dataclass
class OsmNode:
    """
    A raw OpenStreetMap node as parsed from the OSM API XML document.

    Only lives for the duration of one import; tags keep the last value
    seen for a duplicated key.
    """
    node_id: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class OsmNodeFields:
    """Typed candidate fields derived from an OSM node's tags. Nothing is required yet."""
    node_id: int
    name: Optional[str] = None
    description: Optional[str] = None
    amenity: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    postal_code: Optional[int] = None
    city: Optional[str] = None


E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class Classification(Generic[E]):
    """
    Result of mapping a free-text value onto a closed enum.

    `defaulted_from` holds the raw input when no mapping matched and the
    default member was used instead.
    """
    value: E
    defaulted_from: Optional[object] = None

    @property
    def defaulted(self) -> bool:
        return self.defaulted_from is not None


@dataclass
class Pos:
    """
    A point of sale (cafe, bakery, vending machine, ...).

    `id`, `created_at` and `updated_at` are assigned by storage; a Pos
    without an id has not been persisted yet. Names are unique.
    """
    name: str
    description: str
    type: PosType
    campus: CampusType
    street: str
    house_number: str
    postal_code: int
    city: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
