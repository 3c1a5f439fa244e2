"""
Global pytest fixtures.

Keep this file small; feature-level fakes live in `<feature>/conftest.py`.
"""

import pytest  # type: ignore[import-not-found]
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portal.api.main import build_app


@pytest.fixture()
def app() -> FastAPI:
    """Fresh FastAPI app per test so dependency overrides never leak."""
    return build_app()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    """Sync test client (covers most HTTP unit tests)."""
    return TestClient(app)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Default AnyIO backend for async tests."""
    return "asyncio"
