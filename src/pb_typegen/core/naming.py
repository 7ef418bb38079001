from __future__ import annotations

import re
import string


_WORD = re.compile(r"[^\W_]+")
_WORD_PARTS = re.compile(r"([^\W_])([^\W_]*)")
_NON_WORD_CHARS = re.compile(r"[\W_]")
_NON_WORD_RUNS = re.compile(r"\W+")
_SNAKE_SPLIT = re.compile(r" |\B(?=[A-Z])")
_TITLE_WORD = re.compile(r"\w\S*")


def pascal(value: str) -> str:
    if _WORD.fullmatch(value):
        return value[0].upper() + value[1:]
    capitalized = _WORD_PARTS.sub(
        lambda match: match.group(1).upper() + match.group(2).lower(), value
    )
    return _NON_WORD_CHARS.sub("", capitalized)


def camel(value: str) -> str:
    converted = pascal(value)
    return converted[:1].lower() + converted[1:]


def snake(value: str) -> str:
    spaced = _NON_WORD_RUNS.sub(" ", value)
    return "_".join(word.lower() for word in _SNAKE_SPLIT.split(spaced))


def screaming_snake(value: str) -> str:
    return snake(value).upper()


def title(value: str) -> str:
    spaced = screaming_snake(value).replace("_", " ", 1)
    return _TITLE_WORD.sub(
        lambda match: match.group(0)[0].upper() + match.group(0)[1:].lower(), spaced
    )


def sanitize_identifier(name: str) -> str:
    """Quote names that start with a digit so they stay usable as keys."""
    if name and name[0] in string.digits:
        return f'"{name}"'
    return name
