"""
app/validators package marker.
"""

from app.validators.value_coercers import local_midnight, parse_date, parse_instant, parse_int

__all__ = [
    "local_midnight",
    "parse_date",
    "parse_instant",
    "parse_int",
]
