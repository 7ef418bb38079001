from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from pb_typegen.core.naming import pascal
from pb_typegen.query.filtering import Operand
from pb_typegen.schema.models import FieldKind


EXPAND_GENERIC_NAME = "expand"
DATE_STRING_TYPE_NAME = "IsoDateString"
RECORD_ID_STRING_NAME = "RecordIdString"
HTML_STRING_NAME = "HTMLString"
RECORD_TYPE_COMMENT = "// Record types for each collection"

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"


@dataclass(frozen=True)
class NamedValue:
    label: str
    value: str


@dataclass(frozen=True)
class FilterConstructor:
    name: str
    operand: str


_CONSTRUCTORS = {
    "eq": Operand.EQUAL,
    "neq": Operand.NOT_EQUAL,
    "gt": Operand.GREATER_THAN,
    "gte": Operand.GREATER_THAN_OR_EQUAL,
    "lt": Operand.LESS_THAN,
    "lte": Operand.LESS_THAN_OR_EQUAL,
    "like": Operand.LIKE,
    "notLike": Operand.NOT_LIKE,
    "anyOfEq": Operand.ANY_OF_EQUAL,
    "anyOfNeq": Operand.ANY_OF_NOT_EQUAL,
    "anyOfGt": Operand.ANY_OF_GREATER_THAN,
    "anyOfGte": Operand.ANY_OF_GREATER_THAN_OR_EQUAL,
    "anyOfLt": Operand.ANY_OF_LESS_THAN,
    "anyOfLte": Operand.ANY_OF_LESS_THAN_OR_EQUAL,
    "anyOfLike": Operand.ANY_OF_LIKE,
    "anyOfNotLike": Operand.ANY_OF_NOT_LIKE,
}


def _quote_single(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _quote_double(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def create_environment(template_dir: Path | None = None) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["pascal"] = pascal
    env.filters["ts_literal"] = _quote_single
    env.filters["ts_string"] = _quote_double
    return env


_ENV = create_environment()


def render(template_name: str, **context: object) -> str:
    return _ENV.get_template(template_name).render(**context).strip("\n")


def header(sdk: bool = True) -> str:
    return render("header.ts.j2", sdk=sdk)


def alias_types() -> str:
    return render(
        "aliases.ts.j2",
        date_type=DATE_STRING_TYPE_NAME,
        record_id_type=RECORD_ID_STRING_NAME,
        html_type=HTML_STRING_NAME,
    )


def system_fields() -> str:
    return render(
        "system_fields.ts.j2",
        date_type=DATE_STRING_TYPE_NAME,
        record_id_type=RECORD_ID_STRING_NAME,
    )


def field_types() -> str:
    kinds = [NamedValue(label=pascal(kind.value), value=kind.value) for kind in FieldKind]
    kinds.append(NamedValue(label="Unknown", value="unknown"))
    return render("field_types.ts.j2", kinds=kinds)


def filtering(sdk: bool = True) -> str:
    operands = [NamedValue(label=pascal(operand.name.lower()), value=operand.value) for operand in Operand]
    constructors = [
        FilterConstructor(name=name, operand=pascal(operand.name.lower()))
        for name, operand in _CONSTRUCTORS.items()
    ]
    return render(
        "filtering.ts.j2",
        operands=operands,
        constructors=constructors,
        sdk=sdk,
    )


def sorting() -> str:
    return render("sorting.ts.j2")
