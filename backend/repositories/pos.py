"""
POS repository backed by SQLAlchemy (SQLite by default).
"""
import logging
from datetime import datetime
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.exceptions import DuplicatePosNameError, PosNotFoundError
from domain.models import CampusType, Pos, PosType
from repositories.models import PosORM

logger = logging.getLogger(__name__)


def _pos_from_orm(orm: PosORM) -> Pos:
    return Pos(
        id=orm.id,
        name=orm.name,
        description=orm.description,
        type=PosType(orm.type),
        campus=CampusType(orm.campus),
        street=orm.street,
        house_number=orm.house_number,
        postal_code=orm.postal_code,
        city=orm.city,
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


def _update_orm_from_pos(orm: PosORM, pos: Pos) -> None:
    orm.name = pos.name
    orm.description = pos.description
    orm.type = pos.type.value
    orm.campus = pos.campus.value
    orm.street = pos.street
    orm.house_number = pos.house_number
    orm.postal_code = pos.postal_code
    orm.city = pos.city


class PosRepository:
    """CRUD operations for points of sale. Names are unique."""

    def list_pos(self, session: Session) -> List[Pos]:
        rows = session.query(PosORM).order_by(PosORM.id).all()
        return [_pos_from_orm(r) for r in rows]

    def get_pos(self, session: Session, pos_id: int) -> Pos:
        orm = session.get(PosORM, pos_id)
        if not orm:
            raise PosNotFoundError(pos_id)
        return _pos_from_orm(orm)

    def upsert(self, session: Session, pos: Pos) -> Pos:
        """
        Insert a Pos without id, or update the stored row for a Pos with id.

        Raises:
            PosNotFoundError: if pos.id is set but no such row exists.
            DuplicatePosNameError: if another row already uses pos.name.
        """
        now = datetime.utcnow()
        if pos.id is None:
            orm = PosORM(created_at=now)
        else:
            orm = session.get(PosORM, pos.id)
            if not orm:
                raise PosNotFoundError(pos.id)
        _update_orm_from_pos(orm, pos)
        orm.updated_at = now
        session.add(orm)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            if self._name_taken(session, pos):
                raise DuplicatePosNameError(pos.name)
            raise
        session.refresh(orm)
        return _pos_from_orm(orm)

    def clear(self, session: Session) -> None:
        session.query(PosORM).delete()
        session.commit()

    def _name_taken(self, session: Session, pos: Pos) -> bool:
        query = session.query(PosORM.id).filter(PosORM.name == pos.name)
        if pos.id is not None:
            query = query.filter(PosORM.id != pos.id)
        return query.first() is not None
