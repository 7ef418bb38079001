from __future__ import annotations

from enum import Enum
import logging
from collections import Counter
from typing import Any, Iterable, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    FILE = "file"
    TEXT = "text"
    NUMBER = "number"
    BOOL = "bool"
    EMAIL = "email"
    URL = "url"
    DATE = "date"
    SELECT = "select"
    JSON = "json"
    RELATION = "relation"
    USER = "user"
    EDITOR = "editor"


class FieldOptions(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    max_select: int | None = Field(default=None, alias="maxSelect")
    values: list[str] | None = None

    def distinct_values(self) -> list[str]:
        if not self.values:
            return []
        return list(dict.fromkeys(self.values))


class FieldSchema(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    name: str
    type: str
    system: bool = False
    required: bool = False
    unique: bool = False
    options: FieldOptions = Field(default_factory=FieldOptions)

    @model_validator(mode="before")
    @classmethod
    def _lift_flat_options(cls, data: Any) -> Any:
        # Newer PocketBase releases put field options at the top level.
        if isinstance(data, dict) and data.get("options") is None:
            flat = {key: data[key] for key in ("maxSelect", "values") if key in data}
            return {**data, "options": flat}
        return data

    @property
    def kind(self) -> FieldKind | None:
        try:
            return FieldKind(self.type)
        except ValueError:
            return None


BASE_SYSTEM_FIELDS = frozenset({"id", "created", "updated"})
AUTH_SYSTEM_FIELDS = BASE_SYSTEM_FIELDS | {"email", "emailVisibility", "username", "verified"}


class CollectionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    name: str
    type: Literal["base", "auth", "view"] = "base"
    system: bool = False
    fields: list[FieldSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices("fields", "schema"),
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_builtin_fields(cls, data: Any) -> Any:
        # The `fields` layout also lists the built-in columns as system fields.
        if not isinstance(data, dict) or not isinstance(data.get("fields"), list):
            return data
        builtin = AUTH_SYSTEM_FIELDS if data.get("type") == "auth" else BASE_SYSTEM_FIELDS
        fields = [
            field
            for field in data["fields"]
            if not (
                isinstance(field, dict)
                and field.get("system")
                and field.get("name") in builtin
            )
        ]
        return {**data, "fields": fields}

    @property
    def is_auth(self) -> bool:
        return self.type == "auth"


def normalize_collections(
    collections: Iterable[CollectionRecord | dict[str, Any]],
) -> list[CollectionRecord]:
    """Validate raw collection payloads and return them ordered by name."""
    normalized = [
        item if isinstance(item, CollectionRecord) else CollectionRecord.model_validate(item)
        for item in collections
    ]
    _warn_duplicates("collection", [collection.name for collection in normalized])
    for collection in normalized:
        _warn_duplicates(
            f"field in {collection.name}",
            [field.name for field in collection.fields],
        )
    return sorted(normalized, key=lambda collection: collection.name)


def _warn_duplicates(label: str, names: list[str]) -> None:
    for name, count in Counter(names).items():
        if count > 1:
            logger.warning("duplicate %s name %r (%d occurrences)", label, name, count)
