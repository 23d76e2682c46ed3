"""Editing sessions, each owning one template and one placeholder registry."""

from .store import MergeSession, SessionNotFoundError, SessionStore

__all__ = [
    "MergeSession",
    "SessionNotFoundError",
    "SessionStore",
]
