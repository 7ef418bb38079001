from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pb_typegen.inspector.errors import SchemaSourceError


logger = logging.getLogger(__name__)

_SCHEMA_COLUMNS = ("schema", "fields")


def get_engine(db_path: Path) -> Engine:
    if not db_path.exists():
        raise SchemaSourceError(f"Database file not found: {db_path}")
    return create_engine(f"sqlite:///{db_path}")


def _decode_fields(row: dict[str, Any]) -> list[dict[str, Any]]:
    for column in _SCHEMA_COLUMNS:
        value = row.get(column)
        if value is None:
            continue
        if isinstance(value, str):
            return json.loads(value)
        return value
    return []


def fetch_collections(engine: Engine) -> list[dict[str, Any]]:
    try:
        with engine.connect() as connection:
            rows = connection.execute(text("SELECT * FROM _collections")).mappings().all()
    except SQLAlchemyError as exc:
        raise SchemaSourceError(f"Failed to read _collections: {exc}") from exc

    collections = []
    for row in rows:
        collection = {key: value for key, value in row.items() if key not in _SCHEMA_COLUMNS}
        collection["fields"] = _decode_fields(dict(row))
        collections.append(collection)
    logger.info("loaded %d collections from database", len(collections))
    return collections


def from_database(db_path: Path) -> list[dict[str, Any]]:
    return fetch_collections(get_engine(db_path))
