"""Pytest configuration and shared fixtures."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mergesmith.api.routes import router
from mergesmith.merge import MergeEngine
from mergesmith.registry import PlaceholderRegistry
from mergesmith.sessions import SessionStore


@pytest.fixture
def registry() -> PlaceholderRegistry:
    """Create an empty, lenient registry."""
    return PlaceholderRegistry()


@pytest.fixture
def engine() -> MergeEngine:
    """Create a merge engine with default settings."""
    return MergeEngine()


@pytest.fixture
def welcome_registry() -> PlaceholderRegistry:
    """Registry for "Hi [Name], welcome to [Company]" with uneven value lists."""
    return PlaceholderRegistry.from_mapping(
        {
            "Name": ["Ann", "Bob"],
            "Company": ["Acme"],
        }
    )


@pytest.fixture
def session_store() -> SessionStore:
    """Create an isolated session store."""
    return SessionStore(ttl_minutes=30, max_sessions=10)


@pytest.fixture
def client(session_store):
    """Create a test client backed by an isolated session store."""
    app = FastAPI()
    app.include_router(router, prefix="/api")

    with patch("mergesmith.api.routes.get_session_store", return_value=session_store), patch(
        "mergesmith.api.routes.get_merge_engine", return_value=MergeEngine()
    ):
        yield TestClient(app)
