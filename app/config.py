"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from db.config import load_env_files

DEFAULT_IMPORT_DIR = "/app/imports"
# Largest value csv.field_size_limit accepts on every platform (C long).
DEFAULT_MAX_FIELD_SIZE = 2**31 - 1


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class CSVImportSettings:
    """
    Runtime settings for time entry CSV imports.

    source_path / default_username / dry_run drive the one-shot import run at
    process startup. import_dir is the only directory the HTTP trigger may
    read from.
    """

    source_path: str | None = None
    default_username: str | None = None
    dry_run: bool = False
    import_dir: Path = Path(DEFAULT_IMPORT_DIR)
    max_reported_issues: int = 500
    log_row_issues: bool = True
    max_field_size: int = DEFAULT_MAX_FIELD_SIZE


@lru_cache(maxsize=1)
def get_csv_import_settings() -> CSVImportSettings:
    """
    Return cached CSV import settings from environment variables.
    """

    return CSVImportSettings(
        source_path=_get_optional_str_env("IMPORT_CSV"),
        default_username=_get_optional_str_env("IMPORT_USERNAME"),
        dry_run=_get_bool_env("IMPORT_DRY_RUN", False),
        import_dir=Path(_get_str_env("IMPORT_DIR", DEFAULT_IMPORT_DIR)),
        max_reported_issues=max(0, _get_int_env("IMPORT_MAX_REPORTED_ISSUES", 500)),
        log_row_issues=_get_bool_env("IMPORT_LOG_ROW_ISSUES", True),
        max_field_size=min(
            DEFAULT_MAX_FIELD_SIZE,
            max(1, _get_int_env("IMPORT_MAX_FIELD_SIZE", DEFAULT_MAX_FIELD_SIZE)),
        ),
    )
