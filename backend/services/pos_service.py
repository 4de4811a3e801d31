"""
POS service: business logic on top of the POS repository and the OSM client.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from domain.exceptions import DuplicatePosNameError
from domain.models import Pos
from repositories import PosRepository
from services.osm_client import OsmClient, get_default_osm_client
from services.pos_conversion import convert_osm_node_to_pos

logger = logging.getLogger(__name__)


class PosService:
    """
    Create, update, read and import points of sale.

    Update requires the POS to exist already; create relies on the unique
    name constraint in storage. No lock is held between the existence check
    and the write, so concurrent writers are resolved by the database.
    """

    def __init__(
        self,
        repository: Optional[PosRepository] = None,
        osm_client: Optional[OsmClient] = None,
    ):
        self.repository = repository or PosRepository()
        self._osm_client = osm_client

    @property
    def osm_client(self) -> OsmClient:
        if self._osm_client is None:
            self._osm_client = get_default_osm_client()
        return self._osm_client

    def clear(self, session: Session) -> None:
        logger.warning("Clearing all POS data")
        self.repository.clear(session)

    def get_all(self, session: Session) -> List[Pos]:
        logger.debug("Retrieving all POS")
        return self.repository.list_pos(session)

    def get_by_id(self, session: Session, pos_id: int) -> Pos:
        logger.debug("Retrieving POS with ID: %s", pos_id)
        return self.repository.get_pos(session, pos_id)

    def upsert(self, session: Session, pos: Pos) -> Pos:
        """
        Create `pos` if it has no id, otherwise update the stored POS.

        Raises:
            PosNotFoundError: on update, if no POS with that id exists.
                Nothing is written in that case.
            DuplicatePosNameError: if another POS already has this name.
        """
        if pos.id is None:
            logger.info("Creating new POS: %s", pos.name)
        else:
            logger.info("Updating POS with ID: %s", pos.id)
            self.repository.get_pos(session, pos.id)
        return self._perform_upsert(session, pos)

    def import_from_osm_node(self, session: Session, node_id: int) -> Pos:
        """
        Fetch an OSM node, convert it to a POS and store it.

        The converted POS never has an id, so importing the same node twice
        takes the create path again and fails with DuplicatePosNameError.

        Raises:
            OsmNodeNotFoundError: if the node can't be fetched or parsed.
            OsmNodeMissingFieldsError: if the node lacks required tags.
            DuplicatePosNameError: if a POS with the resolved name exists.
        """
        logger.info("Importing POS from OpenStreetMap node %s...", node_id)
        osm_node = self.osm_client.fetch_node(node_id)
        saved = self.upsert(session, convert_osm_node_to_pos(osm_node))
        logger.info("Successfully imported POS '%s' from OSM node %s", saved.name, node_id)
        return saved

    def _perform_upsert(self, session: Session, pos: Pos) -> Pos:
        try:
            saved = self.repository.upsert(session, pos)
        except DuplicatePosNameError as exc:
            logger.error("Error upserting POS '%s': %s", pos.name, exc)
            raise
        logger.info("Successfully upserted POS with ID: %s", saved.id)
        return saved
