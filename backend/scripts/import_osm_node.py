"""Import a single point of sale from an OpenStreetMap node.

Usage (from the backend directory):
    python -m scripts.import_osm_node 5589879349 [--database-url sqlite:///campus_coffee.db]

Prints the stored POS on success. Exits with status 1 if the node can't be
fetched, lacks required tags or its name is already taken.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from sqlalchemy.orm import sessionmaker

load_dotenv(Path(__file__).resolve().parents[1] / ".env")

from db import SessionLocal, init_db, make_engine
from domain.exceptions import (
    DuplicatePosNameError,
    OsmNodeMissingFieldsError,
    OsmNodeNotFoundError,
)
from services.pos_service import PosService
from settings import settings

LOG = logging.getLogger("import_osm_node")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import a POS from an OpenStreetMap node.")
    parser.add_argument("node_id", type=int, help="OSM node id, e.g. 5589879349")
    parser.add_argument("--database-url", default=None, help="SQLAlchemy URL (defaults to DATABASE_URL).")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=settings.LOG_LEVEL)
    args = build_parser().parse_args(argv)

    session_factory = SessionLocal
    if args.database_url:
        engine = make_engine(args.database_url)
        init_db(engine)
        session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    else:
        init_db()

    service = PosService()
    with session_factory() as session:
        try:
            pos = service.import_from_osm_node(session, args.node_id)
        except (OsmNodeNotFoundError, OsmNodeMissingFieldsError, DuplicatePosNameError) as exc:
            LOG.error("Import of OSM node %s failed: %s", args.node_id, exc)
            return 1

    print(f"Imported POS {pos.id}: {pos.name} ({pos.type.value}, {pos.campus.value})")
    print(f"  {pos.street} {pos.house_number}, {pos.postal_code} {pos.city}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
