from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pb_typegen.core.config import Settings, SourceConfig
from pb_typegen.inspector.db import from_database
from pb_typegen.inspector.errors import SchemaSourceError
from pb_typegen.inspector.remote import from_url


logger = logging.getLogger(__name__)


def from_json(path: Path) -> list[dict[str, Any]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SchemaSourceError(f"Failed to read schema file {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise SchemaSourceError(f"Schema file {path} must contain a JSON array")
    logger.info("loaded %d collections from %s", len(payload), path)
    return payload


def settings_source(settings: Settings) -> SourceConfig:
    if not settings.has_credentials():
        raise ValueError(
            "Missing environment variables. Check options: pb-typegen --help"
        )
    return SourceConfig(url=settings.url, email=settings.email, password=settings.password)


def load_schema(source: SourceConfig) -> list[dict[str, Any]]:
    if source.db:
        return from_database(source.db)
    if source.json_path:
        return from_json(source.json_path)
    if source.url:
        return from_url(source.url, source.email or "", source.password or "")
    raise ValueError("Missing schema path. Check options: pb-typegen --help")
