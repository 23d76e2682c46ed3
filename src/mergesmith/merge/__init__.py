"""Merge engine.

Turns a template with [name] markers and a placeholder registry into one
resolved document per row, and serializes those documents for download.
"""

from .models import (
    MergeResult,
    Readiness,
    ResolvedDocument,
    ValidationError,
)
from .engine import MergeEngine
from .export import export_documents, parse_export

__all__ = [
    "MergeResult",
    "Readiness",
    "ResolvedDocument",
    "ValidationError",
    "MergeEngine",
    "export_documents",
    "parse_export",
]
