from __future__ import annotations

from typing import Any, Iterable

from pb_typegen.codegen import fragments
from pb_typegen.codegen.collections import (
    build_collection_spec,
    create_collection_columns,
    create_collection_columns_map,
    create_collection_enum,
    create_collection_records,
    create_fields_details,
    create_fields_details_map,
    create_record_type,
    create_typed_client,
)
from pb_typegen.core.config import GenerateOptions
from pb_typegen.schema.models import CollectionRecord, normalize_collections


def generate(
    collections: Iterable[CollectionRecord | dict[str, Any]],
    options: GenerateOptions | None = None,
) -> str:
    """Render the TypeScript definitions for a PocketBase schema."""
    options = options or GenerateOptions()
    records = list(collections)
    if all(isinstance(record, CollectionRecord) for record in records):
        ordered = sorted(records, key=lambda record: record.name)
    else:
        ordered = normalize_collections(records)
    names = [collection.name for collection in ordered]
    specs = [build_collection_spec(collection) for collection in ordered]

    file_parts = [
        fragments.header(sdk=options.sdk),
        create_collection_enum(names),
        fragments.alias_types(),
        fragments.system_fields(),
        fragments.RECORD_TYPE_COMMENT,
        *(create_record_type(spec) for spec in specs),
        create_collection_columns(names),
        create_collection_columns_map(names),
        create_collection_records(names),
        options.sdk and create_typed_client(names),
        fragments.field_types(),
        create_fields_details_map(names),
        *(create_fields_details(spec) for spec in specs),
        fragments.filtering(sdk=options.sdk),
        fragments.sorting(),
    ]
    return "\n\n".join(part for part in file_parts if part) + "\n"
