"""Client for the OpenStreetMap API (v0.6) that fetches single nodes.

Every way a fetch can fail (HTTP error, transport error, empty body,
something that is not XML, a document without a usable node) is reported
to callers as `OsmNodeNotFoundError`. Log records keep the details.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests

from domain.exceptions import MalformedOsmDocumentError, OsmNodeNotFoundError
from domain.models import OsmNode
from services.osm_parser import BOM, OSM_ROOT, XML_DECLARATION, parse_osm_document
from settings import DEFAULT_OSM_USER_AGENT, settings

logger = logging.getLogger(__name__)
_session = requests.Session()

if settings.OSM_USER_AGENT is None:
    logger.warning(
        "OSM_USER_AGENT not set in environment; using fallback UA. "
        "The OSM API usage policy asks for an identifying User-Agent."
    )

OSM_HEADERS = {
    "Accept": "application/xml, text/xml, */*",
    "User-Agent": settings.OSM_USER_AGENT or DEFAULT_OSM_USER_AGENT,
}


def _looks_like_xml(body: str) -> bool:
    trimmed = body.strip().lstrip(BOM).strip()
    return trimmed.startswith(XML_DECLARATION) or trimmed.startswith(OSM_ROOT)


class OsmClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.OSM_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.OSM_API_TIMEOUT_SECONDS
        self.logger = logging.getLogger(__name__)

    def node_url(self, node_id: int) -> str:
        return f"{self.base_url}/{node_id}"

    def _get(self, node_id: int) -> requests.Response:
        try:
            return _session.get(self.node_url(node_id), headers=OSM_HEADERS, timeout=self.timeout)
        except requests.RequestException as exc:
            self.logger.error("Error fetching OSM node %s: %s", node_id, exc)
            raise OsmNodeNotFoundError(node_id) from exc

    def fetch_node(self, node_id: int) -> OsmNode:
        """
        Fetch and parse a single OSM node.

        Raises:
            OsmNodeNotFoundError: if the node does not exist or the response
                cannot be interpreted as an OSM node document.
        """
        self.logger.info("Fetching OSM node %s from API...", node_id)
        resp = self._get(node_id)
        body = resp.text or ""
        self.logger.info("OSM API response status: %s, body length: %d", resp.status_code, len(body))

        if resp.status_code == 404:
            self.logger.warning("OSM node %s not found (404)", node_id)
            raise OsmNodeNotFoundError(node_id)
        if resp.status_code != 200 or not body:
            self.logger.error(
                "Failed to fetch OSM node %s: HTTP status %s, body: %s",
                node_id,
                resp.status_code,
                body[:200] or "<empty>",
            )
            raise OsmNodeNotFoundError(node_id)

        self.logger.debug("OSM API response body (first 500 chars): %s", body[:500])
        if not _looks_like_xml(body):
            self.logger.error("Response doesn't appear to be XML. First 200 chars: %s", body.strip()[:200])
            raise OsmNodeNotFoundError(node_id)

        try:
            node = parse_osm_document(body, node_id)
        except MalformedOsmDocumentError as exc:
            self.logger.error("Unusable OSM document for node %s: %s", node_id, exc.reason)
            raise OsmNodeNotFoundError(node_id) from exc

        self.logger.info("Successfully fetched and parsed OSM node %s", node_id)
        return node


_default_osm_client: Optional[OsmClient] = None


def get_default_osm_client() -> OsmClient:
    global _default_osm_client
    if _default_osm_client is None:
        _default_osm_client = OsmClient()
    return _default_osm_client
