from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from pb_typegen.codegen.fragments import (
    DATE_STRING_TYPE_NAME,
    HTML_STRING_NAME,
    RECORD_ID_STRING_NAME,
    render,
)
from pb_typegen.core.naming import pascal, sanitize_identifier, title
from pb_typegen.schema.models import CollectionRecord, FieldKind, FieldSchema


logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "unknown"

_NUMERIC = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
    r"|[+-]?Infinity"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+",
    re.ASCII,
)


@dataclass(frozen=True)
class EnumMemberSpec:
    name: str
    value: str


@dataclass(frozen=True)
class SelectEnumSpec:
    name: str
    field_literal: str
    members: tuple[EnumMemberSpec, ...]


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    literal: str
    label: str
    kind_label: str
    enum_name: str | None = None


# (name, FieldType member) of the columns every collection carries.
BASE_COLUMNS = (("id", "Text"), ("created", "Date"), ("updated", "Date"))
AUTH_COLUMNS = (
    ("email", "Text"),
    ("emailVisibility", "Bool"),
    ("username", "Text"),
    ("verified", "Bool"),
)


def field_name_to_generic(name: str) -> str:
    return f"T{name}"


def get_option_enum_name(collection_name: str, field_name: str) -> str:
    return f"{pascal(collection_name)}{pascal(field_name)}Options"


def get_select_option_enum_name(value: str) -> str:
    # A numeral cannot be an enum member name.
    if not value.strip() or _NUMERIC.fullmatch(value.strip()):
        return f"E{value}"
    return value


def _has_option_enum(field: FieldSchema) -> bool:
    return field.kind is FieldKind.SELECT and bool(field.options.distinct_values())


def _many(field: FieldSchema) -> bool:
    return field.options.max_select is not None and field.options.max_select > 1


def map_field_type(collection_name: str, field: FieldSchema) -> str:
    """Return the TypeScript type expression for one field."""
    match field.kind:
        case FieldKind.BOOL:
            return "boolean"
        case FieldKind.DATE:
            return DATE_STRING_TYPE_NAME
        case FieldKind.EDITOR:
            return HTML_STRING_NAME
        case FieldKind.EMAIL | FieldKind.TEXT | FieldKind.URL:
            return "string"
        case FieldKind.NUMBER:
            return "number"
        case FieldKind.FILE:
            return "string[]" if _many(field) else "string"
        case FieldKind.JSON:
            return f"null | {field_name_to_generic(field.name)}"
        case FieldKind.RELATION:
            if field.options.max_select == 1:
                return RECORD_ID_STRING_NAME
            return f"{RECORD_ID_STRING_NAME}[]"
        case FieldKind.SELECT:
            value_type = (
                get_option_enum_name(collection_name, field.name)
                if _has_option_enum(field)
                else "string"
            )
            return f"{value_type}[]" if _many(field) else value_type
        case FieldKind.USER:
            return f"{RECORD_ID_STRING_NAME}[]" if _many(field) else RECORD_ID_STRING_NAME
        case None:
            logger.warning('unknown type "%s" found in schema', field.type)
            return UNKNOWN_TYPE


def create_type_field(collection_name: str, field: FieldSchema) -> str:
    required = "" if field.required else "?"
    field_type = map_field_type(collection_name, field)
    return f"\t{sanitize_identifier(field.name)}{required}: {field_type}"


def create_select_enums(collection: CollectionRecord) -> list[SelectEnumSpec]:
    enums = []
    for field in collection.fields:
        if not _has_option_enum(field):
            continue
        members = tuple(
            EnumMemberSpec(name=get_select_option_enum_name(value), value=value)
            for value in field.options.distinct_values()
        )
        enums.append(
            SelectEnumSpec(
                name=get_option_enum_name(collection.name, field.name),
                field_literal=sanitize_identifier(field.name),
                members=members,
            )
        )
    return enums


def create_columns(collection: CollectionRecord) -> list[ColumnSpec]:
    """Declared fields followed by the system columns of the collection kind."""
    columns = [
        ColumnSpec(
            name=field.name,
            literal=sanitize_identifier(field.name),
            label=title(field.name),
            kind_label=pascal(field.kind.value) if field.kind else "Unknown",
            enum_name=(
                get_option_enum_name(collection.name, field.name)
                if _has_option_enum(field)
                else None
            ),
        )
        for field in collection.fields
    ]
    system_columns = BASE_COLUMNS + (AUTH_COLUMNS if collection.is_auth else ())
    columns.extend(
        ColumnSpec(name=name, literal=name, label=title(name), kind_label=kind_label)
        for name, kind_label in system_columns
    )
    return columns


def render_select_enum(enum: SelectEnumSpec) -> str:
    return render("select_enum.ts.j2", enum=enum)
