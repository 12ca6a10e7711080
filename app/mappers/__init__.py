"""
app/mappers package marker.
"""

from app.mappers.field_normalizer import first_non_blank, normalize_header, normalize_row

__all__ = [
    "first_non_blank",
    "normalize_header",
    "normalize_row",
]
