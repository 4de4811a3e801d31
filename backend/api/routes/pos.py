"""
POS API routes.
"""
from typing import List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from db import SessionLocal
from domain.exceptions import (
    DuplicatePosNameError,
    OsmNodeMissingFieldsError,
    OsmNodeNotFoundError,
    PosNotFoundError,
)
from domain.models import CampusType, Pos, PosType
from services.pos_service import PosService

router = APIRouter()
pos_service = PosService()


class PosRequest(BaseModel):
    id: Optional[int] = None
    name: str
    description: str = ""
    type: str
    campus: str
    street: str
    house_number: str
    postal_code: int
    city: str


class PosResponse(BaseModel):
    id: int
    name: str
    description: str
    type: str
    campus: str
    street: str
    house_number: str
    postal_code: int
    city: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def pos_to_response(pos: Pos) -> PosResponse:
    """Convert domain Pos to API response."""
    return PosResponse(
        id=pos.id,
        name=pos.name,
        description=pos.description,
        type=pos.type.value,
        campus=pos.campus.value,
        street=pos.street,
        house_number=pos.house_number,
        postal_code=pos.postal_code,
        city=pos.city,
        created_at=pos.created_at.isoformat() if pos.created_at else None,
        updated_at=pos.updated_at.isoformat() if pos.updated_at else None,
    )


def request_to_pos(data: PosRequest) -> Pos:
    try:
        pos_type = PosType(data.type.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid type: {data.type}")
    try:
        campus = CampusType(data.campus.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid campus: {data.campus}")
    return Pos(
        id=data.id,
        name=data.name,
        description=data.description,
        type=pos_type,
        campus=campus,
        street=data.street,
        house_number=data.house_number,
        postal_code=data.postal_code,
        city=data.city,
    )


@router.get("", response_model=List[PosResponse])
async def list_pos():
    """List all points of sale."""
    with SessionLocal() as session:
        return [pos_to_response(p) for p in pos_service.get_all(session)]


@router.get("/{pos_id}", response_model=PosResponse)
async def get_pos(pos_id: int):
    with SessionLocal() as session:
        try:
            return pos_to_response(pos_service.get_by_id(session, pos_id))
        except PosNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc))


@router.post("", response_model=PosResponse, status_code=201)
async def create_pos(data: PosRequest):
    """Create a new point of sale."""
    if data.id is not None:
        raise HTTPException(status_code=400, detail="ID must not be set when creating a POS")
    pos = request_to_pos(data)
    with SessionLocal() as session:
        try:
            return pos_to_response(pos_service.upsert(session, pos))
        except DuplicatePosNameError as exc:
            raise HTTPException(status_code=409, detail=str(exc))


@router.put("/{pos_id}", response_model=PosResponse)
async def update_pos(pos_id: int, data: PosRequest):
    """Update an existing point of sale."""
    if data.id is not None and data.id != pos_id:
        raise HTTPException(status_code=400, detail="POS ID in path and body do not match")
    pos = request_to_pos(data)
    pos.id = pos_id
    with SessionLocal() as session:
        try:
            return pos_to_response(pos_service.upsert(session, pos))
        except PosNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        except DuplicatePosNameError as exc:
            raise HTTPException(status_code=409, detail=str(exc))


@router.post("/import/osm/{node_id}", response_model=PosResponse, status_code=201)
async def import_from_osm(node_id: int):
    """Import a point of sale from an OpenStreetMap node."""
    with SessionLocal() as session:
        try:
            return pos_to_response(pos_service.import_from_osm_node(session, node_id))
        except OsmNodeNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        except OsmNodeMissingFieldsError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except DuplicatePosNameError as exc:
            raise HTTPException(status_code=409, detail=str(exc))


@router.delete("", status_code=204)
async def clear_pos():
    """Delete all points of sale."""
    with SessionLocal() as session:
        pos_service.clear(session)
