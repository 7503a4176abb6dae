"""Shared fixtures for API layer tests.

Provides an application state backed by the sample catalog, the FastAPI app
with ``get_state`` overridden through dependency injection, and a Starlette
TestClient wired to that app. The client is not entered as a context
manager, so the real lifespan (catalog file, Gemini key) never runs.
"""

import pytest
from fastapi.testclient import TestClient

from replyassist.api.deps import AppState, get_state
from replyassist.engine import SuggestionEngine


@pytest.fixture()
def mock_state(catalog):
    return AppState(engine=SuggestionEngine(catalog), catalog_size=len(catalog))


@pytest.fixture()
def app(mock_state):
    from replyassist.app import app as real_app

    real_app.dependency_overrides[get_state] = lambda: mock_state
    yield real_app
    real_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    return TestClient(app, raise_server_exceptions=False)
