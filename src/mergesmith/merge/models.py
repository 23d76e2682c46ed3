"""Data models for the merge engine."""

from typing import Optional

from pydantic import BaseModel, Field


class ResolvedDocument(BaseModel):
    """One fully-substituted document produced for a row."""

    id: int  # Row index, starting at 0
    name: str  # Display name, e.g. "Email 1"
    content: str


class MergeResult(BaseModel):
    """Generated documents together with their count."""

    documents: list[ResolvedDocument] = Field(default_factory=list)
    count: int = 0


class Readiness(BaseModel):
    """Whether a template and registry are ready to generate."""

    ready: bool
    count: int  # Number of documents generate would produce
    hint: Optional[str] = None  # Guidance when not ready


class ValidationError(Exception):
    """Raised when a template or registry cannot produce any documents."""

    pass
