from __future__ import annotations

import pytest

from pb_typegen.core.naming import (
    camel,
    pascal,
    sanitize_identifier,
    screaming_snake,
    snake,
    title,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("abc", "Abc"),
        ("some_collection", "SomeCollection"),
        ("a1b", "A1b"),
        ("user-profiles", "UserProfiles"),
        ("myCollection", "MyCollection"),
        ("äpfel_bäume", "ÄpfelBäume"),
    ],
)
def test_pascal(value: str, expected: str) -> None:
    assert pascal(value) == expected


@pytest.mark.parametrize("value", ["abc", "some_collection", "user-profiles", "a1b"])
def test_pascal_is_idempotent(value: str) -> None:
    once = pascal(value)
    assert pascal(once) == once


def test_camel_lowers_first_character() -> None:
    assert camel("some_collection") == "someCollection"
    assert camel("posts") == "posts"


def test_snake_splits_camel_case() -> None:
    assert snake("emailVisibility") == "email_visibility"
    assert snake("user-profiles") == "user_profiles"
    assert snake("posts") == "posts"


def test_screaming_snake() -> None:
    assert screaming_snake("post") == "POST"
    assert screaming_snake("emailVisibility") == "EMAIL_VISIBILITY"


def test_title() -> None:
    assert title("emailVisibility") == "Email Visibility"
    assert title("id") == "Id"
    assert title("created") == "Created"


def test_sanitize_identifier_quotes_leading_digit() -> None:
    assert sanitize_identifier("1abc") == '"1abc"'
    assert sanitize_identifier("abc") == "abc"
    assert sanitize_identifier("") == ""


def test_sanitize_identifier_leaves_empty_and_non_ascii_digits() -> None:
    assert sanitize_identifier("") == ""
    assert sanitize_identifier("\u0661abc") == "\u0661abc"
