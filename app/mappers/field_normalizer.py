"""
app/mappers/field_normalizer.py

Header normalization and alias lookup for loosely structured CSV files.

Spreadsheets exported by hand rarely agree on column names ("Date Worked",
"DATE-WORKED", "Datum"). Every header is reduced to lowercase ASCII letters and
digits, and each logical field is looked up through an ordered alias list.
"""

from __future__ import annotations

import re
from typing import Mapping, Sequence

_NON_ALNUM = re.compile(r"[^a-z0-9]")

USERNAME_ALIASES: tuple[str, ...] = ("username", "user", "email")
SUBJECT_ALIASES: tuple[str, ...] = ("subject", "title", "betreff", "task")
DESCRIPTION_ALIASES: tuple[str, ...] = ("description", "desc", "beschreibung", "notes", "note")
DATE_WORKED_ALIASES: tuple[str, ...] = ("dateworked", "date", "workdate", "datum", "day")
MINUTES_WORKED_ALIASES: tuple[str, ...] = (
    "minutesworked",
    "minutes",
    "duration",
    "dauer",
    "mins",
    "zeitmin",
)
CREATED_AT_ALIASES: tuple[str, ...] = ("createdat", "created", "erstelltam")
UPDATED_AT_ALIASES: tuple[str, ...] = ("updatedat", "lastupdated", "modified", "geaendertam")


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return _NON_ALNUM.sub("", header.lower())


def normalize_row(raw_row: Mapping[str | None, object]) -> dict[str, str | None]:
    """
    Re-key one CSV row by normalized header.

    Cells without a header (extra trailing columns) are dropped. When two
    headers normalize to the same key the right-most column wins.
    """

    normalized: dict[str, str | None] = {}
    for header, value in raw_row.items():
        if header is None:
            continue
        key = normalize_header(header)
        if not key:
            continue
        normalized[key] = value if value is None else str(value)
    return normalized


def first_non_blank(row: Mapping[str, str | None], aliases: Sequence[str]) -> str | None:
    """
    Return the trimmed value of the first alias present with non-blank content.
    """

    for alias in aliases:
        value = row.get(alias)
        if value is None:
            continue
        stripped = value.strip()
        if stripped:
            return stripped
    return None
