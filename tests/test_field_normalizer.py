from __future__ import annotations

import pytest

from app.mappers.field_normalizer import (
    DATE_WORKED_ALIASES,
    SUBJECT_ALIASES,
    USERNAME_ALIASES,
    first_non_blank,
    normalize_header,
    normalize_row,
)


@pytest.mark.parametrize("header", ["Date Worked", "dateworked", "DATE-WORKED", " date_worked "])
def test_header_variants_resolve_to_same_key(header: str) -> None:
    assert normalize_header(header) == "dateworked"


def test_non_ascii_letters_are_dropped() -> None:
    assert normalize_header("Geändert am") == "gendertam"
    assert normalize_header("Zeit (min)") == "zeitmin"


def test_normalize_row_drops_headerless_and_empty_keys() -> None:
    row = {"User Name": "alice", "---": "x", None: ["extra"], "Minutes": "90"}

    assert normalize_row(row) == {"username": "alice", "minutes": "90"}


def test_normalize_row_last_duplicate_column_wins() -> None:
    row = {"Subject": "first", "SUBJECT": "second"}

    assert normalize_row(row) == {"subject": "second"}


def test_first_non_blank_follows_alias_order() -> None:
    row = {"title": "From title", "subject": "From subject"}

    assert first_non_blank(row, SUBJECT_ALIASES) == "From subject"


def test_first_non_blank_skips_blank_earlier_alias() -> None:
    row = {"username": "   ", "user": None, "email": " bob@example.com "}

    assert first_non_blank(row, USERNAME_ALIASES) == "bob@example.com"


def test_first_non_blank_returns_none_when_absent() -> None:
    assert first_non_blank({"something": "else"}, DATE_WORKED_ALIASES) is None
