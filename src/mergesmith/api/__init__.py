"""HTTP API for MergeSmith."""

from .app import create_app

__all__ = ["create_app"]
