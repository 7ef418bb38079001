"""Filter expressions for PocketBase list queries.

Filters are plain dicts so they round-trip through JSON (for example as
URL state) exactly like the helpers emitted into the TypeScript output:

    {"field": "title", "operand": "~", "value": "news", "id": "..."}
    {"and": [f1, f2, ...], "id": "..."}
    {"or": [f1, f2, ...], "id": "..."}
    {"group": f, "id": "..."}
"""

from __future__ import annotations

from enum import Enum
import secrets
import string
from typing import Any, Literal


Filter = dict[str, Any]

_ALPHABET = string.ascii_lowercase + string.digits


class Operand(str, Enum):
    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    LIKE = "~"
    NOT_LIKE = "!~"
    ANY_OF_EQUAL = "?="
    ANY_OF_NOT_EQUAL = "?!="
    ANY_OF_GREATER_THAN = "?>"
    ANY_OF_GREATER_THAN_OR_EQUAL = "?>="
    ANY_OF_LESS_THAN = "?<"
    ANY_OF_LESS_THAN_OR_EQUAL = "?<="
    ANY_OF_LIKE = "?~"
    ANY_OF_NOT_LIKE = "?!~"


def _random_string(length: int = 8) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def _filter_id() -> str:
    return _random_string(11)


def operation(field: str, value: Any, operand: Operand) -> Filter:
    return {"field": field, "operand": operand.value, "value": value, "id": _filter_id()}


def and_(*operands: Filter) -> Filter:
    return {"and": list(operands), "id": _filter_id()}


def or_(*operands: Filter) -> Filter:
    return {"or": list(operands), "id": _filter_id()}


def group(operand: Filter) -> Filter:
    return {"group": operand, "id": _filter_id()}


def eq(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.EQUAL)


def neq(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.NOT_EQUAL)


def gt(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.GREATER_THAN)


def gte(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.GREATER_THAN_OR_EQUAL)


def lt(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.LESS_THAN)


def lte(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.LESS_THAN_OR_EQUAL)


def like(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.LIKE)


def not_like(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.NOT_LIKE)


def any_of_eq(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.ANY_OF_EQUAL)


def any_of_neq(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.ANY_OF_NOT_EQUAL)


def any_of_gt(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.ANY_OF_GREATER_THAN)


def any_of_gte(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.ANY_OF_GREATER_THAN_OR_EQUAL)


def any_of_lt(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.ANY_OF_LESS_THAN)


def any_of_lte(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.ANY_OF_LESS_THAN_OR_EQUAL)


def any_of_like(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.ANY_OF_LIKE)


def any_of_not_like(field: str, value: Any) -> Filter:
    return operation(field, value, Operand.ANY_OF_NOT_LIKE)


def compile_filter(filter_: Filter) -> tuple[str, dict[str, Any]]:
    """Return the filter expression and the values bound to its placeholders.

    Every leaf gets its own randomized parameter name, so the same field can
    appear more than once in one expression.
    """
    params: dict[str, Any] = {}

    def process(expr: Filter) -> str:
        if "and" in expr:
            return " && ".join(process(item) for item in expr["and"])
        if "or" in expr:
            return " || ".join(process(item) for item in expr["or"])
        if "group" in expr:
            return f"({process(expr['group'])})"

        param_name = f"{expr['field']}_{_random_string()}"
        params[param_name] = expr["value"]
        return f"{expr['field']} {expr['operand']} {{:{param_name}}}"

    return process(filter_), params


def merge_filters(
    new_filter: Filter,
    existing_filter: Filter | None = None,
    behavior: Literal["and", "or"] = "or",
    group_existing_filters: bool = False,
) -> Filter:
    if not existing_filter:
        return new_filter

    existing = group(existing_filter) if group_existing_filters else existing_filter
    if behavior == "and":
        return and_(new_filter, existing)
    if behavior == "or":
        return or_(new_filter, existing)
    raise ValueError(f"Unknown merge behavior: {behavior}")


def is_valid_filter(value: object) -> bool:
    if not isinstance(value, dict):
        return False
    if "id" not in value:
        return False
    if isinstance(value.get("and"), list):
        return all(is_valid_filter(item) for item in value["and"])
    if isinstance(value.get("or"), list):
        return all(is_valid_filter(item) for item in value["or"])
    if "group" in value:
        return is_valid_filter(value["group"])
    if not {"field", "operand", "value"} <= value.keys():
        return False
    return (
        isinstance(value["field"], str)
        and isinstance(value["operand"], str)
    )
