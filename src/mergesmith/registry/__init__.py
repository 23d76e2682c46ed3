"""Placeholder registry.

Holds the named fields of a merge and, per field, the ordered list of values
that line up into output rows.
"""

from .models import LABEL_PALETTE, NotFoundError, Placeholder, Value
from .registry import PlaceholderRegistry

__all__ = [
    "LABEL_PALETTE",
    "NotFoundError",
    "Placeholder",
    "Value",
    "PlaceholderRegistry",
]
