"""
Domain errors raised by the import pipeline and the POS storage layer.
"""
from typing import List, Optional, Sequence


class CampusCoffeeError(Exception):
    """Base class for all domain errors."""


class OsmNodeNotFoundError(CampusCoffeeError):
    """The OSM node could not be fetched or its document could not be interpreted."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"OSM node {node_id} not found")


class MalformedOsmDocumentError(CampusCoffeeError):
    """
    Parser diagnostic for an OSM document that cannot be used.

    Never leaves the OSM client; it is reported as OsmNodeNotFoundError.
    `reason` is one of: empty, no_root, parse_error, no_node, bad_id.
    """

    def __init__(self, node_id: int, reason: str, detail: Optional[str] = None):
        self.node_id = node_id
        self.reason = reason
        self.detail = detail
        message = f"Malformed OSM document for node {node_id}: {reason}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class OsmNodeMissingFieldsError(CampusCoffeeError):
    """The OSM node lacks one or more fields required to build a POS."""

    def __init__(self, node_id: int, missing_fields: Sequence[str] = ()):
        self.node_id = node_id
        self.missing_fields: List[str] = list(missing_fields)
        message = f"OSM node {node_id} is missing required fields"
        if self.missing_fields:
            message = f"{message}: {', '.join(self.missing_fields)}"
        super().__init__(message)


class DuplicatePosNameError(CampusCoffeeError):
    """Another POS already uses this name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"POS with name '{name}' already exists")


class PosNotFoundError(CampusCoffeeError):
    def __init__(self, pos_id: int):
        self.pos_id = pos_id
        super().__init__(f"POS with ID {pos_id} not found")


class InvalidArgumentError(CampusCoffeeError, ValueError):
    """A precondition the pipeline itself guarantees was violated (a bug, not bad input)."""
