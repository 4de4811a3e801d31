from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import pos as pos_router
from domain.exceptions import OsmNodeMissingFieldsError, OsmNodeNotFoundError
from domain.models import OsmNode

PAYLOAD = {
    "name": "Café Extrablatt",
    "description": "",
    "type": "cafe",
    "campus": "ALTSTADT",
    "street": "Hauptstraße",
    "house_number": "53",
    "postal_code": 69117,
    "city": "Heidelberg",
}


@pytest.fixture
def client(session_factory):
    app = FastAPI()
    app.include_router(pos_router.router, prefix="/api/pos")
    with patch.object(pos_router, "SessionLocal", session_factory):
        yield TestClient(app)


def test_create_list_and_get(client):
    resp = client.post("/api/pos", json=PAYLOAD)
    assert resp.status_code == 201
    created = resp.json()
    assert created["type"] == "CAFE"
    assert created["created_at"] is not None

    listed = client.get("/api/pos").json()
    assert [p["name"] for p in listed] == ["Café Extrablatt"]

    resp = client.get(f"/api/pos/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["street"] == "Hauptstraße"


def test_create_with_id_is_rejected(client):
    resp = client.post("/api/pos", json={**PAYLOAD, "id": 5})
    assert resp.status_code == 400


def test_create_with_unknown_type_is_rejected(client):
    resp = client.post("/api/pos", json={**PAYLOAD, "type": "restaurant"})
    assert resp.status_code == 400


def test_duplicate_name_is_conflict(client):
    assert client.post("/api/pos", json=PAYLOAD).status_code == 201
    resp = client.post("/api/pos", json=PAYLOAD)
    assert resp.status_code == 409


def test_get_unknown_is_404(client):
    assert client.get("/api/pos/999").status_code == 404


def test_update(client):
    created = client.post("/api/pos", json=PAYLOAD).json()
    resp = client.put(f"/api/pos/{created['id']}", json={**PAYLOAD, "description": "Breakfast all day"})
    assert resp.status_code == 200
    assert resp.json()["description"] == "Breakfast all day"
    assert resp.json()["id"] == created["id"]


def test_update_unknown_is_404(client):
    assert client.put("/api/pos/999", json=PAYLOAD).status_code == 404


def test_update_id_mismatch_is_400(client):
    assert client.put("/api/pos/1", json={**PAYLOAD, "id": 2}).status_code == 400


def test_clear(client):
    client.post("/api/pos", json=PAYLOAD)
    assert client.delete("/api/pos").status_code == 204
    assert client.get("/api/pos").json() == []


@patch.object(pos_router.pos_service, "_osm_client")
def test_import_from_osm(mock_osm, client):
    mock_osm.fetch_node.return_value = OsmNode(
        node_id=5589879349,
        tags={
            "name:de": "Rada Coffee &amp; Rösterei",
            "amenity": "cafe",
            "addr:street": "Untere Straße",
            "addr:housenumber": "21",
            "addr:postcode": "69117",
            "addr:city": "Heidelberg",
        },
    )

    resp = client.post("/api/pos/import/osm/5589879349")
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Rada Coffee & Rösterei"
    assert body["campus"] == "ALTSTADT"

    # second import creates again and hits the unique name
    assert client.post("/api/pos/import/osm/5589879349").status_code == 409


@pytest.mark.parametrize(
    "error, status_code",
    [
        (OsmNodeNotFoundError(1), 404),
        (OsmNodeMissingFieldsError(1, ["city"]), 400),
    ],
)
def test_import_errors(client, error, status_code):
    with patch.object(pos_router.pos_service, "_osm_client") as mock_osm:
        mock_osm.fetch_node.side_effect = error
        resp = client.post("/api/pos/import/osm/1")
    assert resp.status_code == status_code
