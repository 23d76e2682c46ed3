"""MergeSmith - mail-merge engine for bracketed text templates."""

__version__ = "0.1.0"
