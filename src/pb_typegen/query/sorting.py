"""Sort parameters for PocketBase list queries.

Sort params are ``+column`` / ``-column`` strings. The sorting state form
(``[{"id": column, "desc": bool}]``) matches what table UIs keep.
"""

from __future__ import annotations

from typing import Iterable, Literal


SortingState = list[dict[str, object]]


def is_valid_sort(columns: Iterable[str], value: object) -> bool:
    if not isinstance(value, list):
        return False
    if not all(isinstance(item, str) and item[:1] in ("+", "-") for item in value):
        return False
    names = [item[1:] for item in value]
    if len(set(names)) != len(names):
        return False
    allowed = set(columns)
    return all(name in allowed for name in names)


def unique_columns(params: list[str] | None) -> list[str]:
    """Drop repeated columns, keeping first position and last direction."""
    if not params:
        return []
    directions: dict[str, str] = {}
    for param in params:
        directions[param[1:]] = param[:1] or "+"
    return [f"{prefix}{column}" for column, prefix in directions.items()]


def to_query(params: list[str] | None) -> str | None:
    if params is None:
        return None
    return ",".join(unique_columns(params))


def edit_sorting(
    value: str,
    params: list[str] | None = None,
    desc: bool = False,
    behavior: Literal["add", "remove"] = "add",
) -> list[str] | None:
    remaining = [param for param in unique_columns(params) if param[1:] != value]

    if behavior == "remove":
        return remaining or None

    prefix = "-" if desc else "+"
    return [*remaining, f"{prefix}{value}"]


def to_sorting_state(params: list[str] | None) -> SortingState:
    if not params:
        return []
    return [{"id": param[1:], "desc": param.startswith("-")} for param in params]


def from_sorting_state(state: SortingState | None) -> list[str] | None:
    if not state:
        return None
    return [f"{'-' if item['desc'] else '+'}{item['id']}" for item in state]
