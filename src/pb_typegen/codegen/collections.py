from __future__ import annotations

from dataclasses import dataclass

from pb_typegen.codegen.fields import (
    ColumnSpec,
    SelectEnumSpec,
    create_columns,
    create_select_enums,
    create_type_field,
    field_name_to_generic,
    render_select_enum,
)
from pb_typegen.codegen.fragments import EXPAND_GENERIC_NAME, render
from pb_typegen.core.naming import camel, pascal, screaming_snake
from pb_typegen.schema.models import CollectionRecord, FieldKind


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    type_name: str
    constant_name: str
    function_name: str
    system_fields: str
    generic_args: str
    columns: tuple[ColumnSpec, ...]
    enums: tuple[SelectEnumSpec, ...]
    members: tuple[str, ...]


def get_system_fields(collection: CollectionRecord) -> str:
    # view and base collections share the same system fields
    return "AuthSystemFields" if collection.is_auth else "BaseSystemFields"


def get_generic_args(collection: CollectionRecord, include_expand: bool = True) -> str:
    args = sorted(
        {
            field_name_to_generic(field.name)
            for field in collection.fields
            if field.kind is FieldKind.JSON
        }
    )
    if include_expand:
        args.append(field_name_to_generic(EXPAND_GENERIC_NAME))
    if not args:
        return ""
    return "<" + ", ".join(f"{arg} = unknown" for arg in args) + ">"


def build_collection_spec(collection: CollectionRecord) -> CollectionSpec:
    return CollectionSpec(
        name=collection.name,
        type_name=pascal(collection.name),
        constant_name=screaming_snake(collection.name),
        function_name=f"{camel(collection.name)}FieldsDetails",
        system_fields=get_system_fields(collection),
        generic_args=get_generic_args(collection),
        columns=tuple(create_columns(collection)),
        enums=tuple(create_select_enums(collection)),
        members=tuple(
            sorted(create_type_field(collection.name, field) for field in collection.fields)
        ),
    )


def create_record_type(spec: CollectionSpec) -> str:
    """Column union, column array, option enums and the record interface."""
    parts = [render("columns.ts.j2", spec=spec)]
    parts.extend(render_select_enum(enum) for enum in spec.enums)
    parts.append(
        render(
            "record.ts.j2",
            spec=spec,
            expand_generic=field_name_to_generic(EXPAND_GENERIC_NAME),
        )
    )
    return "\n\n".join(parts)


def create_fields_details(spec: CollectionSpec) -> str:
    return render("fields_details.ts.j2", spec=spec)


def create_collection_enum(collection_names: list[str]) -> str:
    return render("collections_enum.ts.j2", names=collection_names)


def _collection_map(
    declaration: str,
    map_name: str,
    collection_names: list[str],
    entries: dict[str, str],
    separator: str = ",",
) -> str:
    return render(
        "collection_map.ts.j2",
        declaration=declaration,
        map_name=map_name,
        names=collection_names,
        entries=entries,
        separator=separator,
    )


def create_collection_columns(collection_names: list[str]) -> str:
    entries = {name: f"{pascal(name)}Column" for name in collection_names}
    return _collection_map("type", "CollectionColumns", collection_names, entries)


def create_collection_columns_map(collection_names: list[str]) -> str:
    entries = {name: f"{screaming_snake(name)}_COLUMNS" for name in collection_names}
    return _collection_map("const", "COLLECTION_COLUMNS_MAP", collection_names, entries)


def create_collection_records(collection_names: list[str]) -> str:
    entries = {name: f"{pascal(name)}Record" for name in collection_names}
    return _collection_map(
        "type", "CollectionRecords", collection_names, entries, separator=""
    )


def create_fields_details_map(collection_names: list[str]) -> str:
    entries = {name: f"{camel(name)}FieldsDetails()" for name in collection_names}
    return _collection_map(
        "const", "COLLECTION_FIELDS_DETAILS_MAP", collection_names, entries
    )


def create_typed_client(collection_names: list[str]) -> str:
    return render("typed_client.ts.j2", names=collection_names)
