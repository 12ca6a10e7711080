"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import Depends, HTTPException, Query, status

from app.config import CSVImportSettings, get_csv_import_settings


def get_import_dir(settings: CSVImportSettings = Depends(get_csv_import_settings)) -> Path:
    """
    Absolute, normalized import directory.
    """

    return Path(settings.import_dir).expanduser().resolve()


def get_import_file(
    filename: str = Query(..., min_length=1, description="CSV file name inside the import directory"),
    import_dir: Path = Depends(get_import_dir),
) -> Path:
    """
    Resolve ``filename`` inside the import directory.

    Names that resolve outside the directory (``../``, absolute paths, symlinks
    pointing elsewhere) are rejected, as are files that do not exist.
    """

    candidate = (import_dir / filename).resolve()
    if not candidate.is_relative_to(import_dir):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid filename",
                "message": "Filename must not point outside the import directory.",
            },
        )
    if not candidate.is_file():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "File not found",
                "path": str(candidate),
            },
        )
    return candidate
