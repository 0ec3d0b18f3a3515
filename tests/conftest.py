# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser

from tests.helpers import TENANT_ID


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def physician_user():
    return CurrentUser(id="physician-1", tenant_id=TENANT_ID, role="physician", username="dr.who")


@pytest.fixture
def mock_supabase_client():
    """
    Supabase client whose query builder returns itself for every
    chained call; set ``client.query.execute`` to shape the result.
    """
    mock_client = Mock()
    query = Mock()
    for method in ("select", "eq", "order", "limit", "insert", "update", "upsert", "delete"):
        getattr(query, method).return_value = query
    query.execute.return_value = Mock(data=[])
    mock_client.table.return_value = query
    mock_client.query = query
    return mock_client


@pytest.fixture(autouse=True)
def reset_cache():
    """Reset cache before each test."""
    from core.cache import cache_clear
    cache_clear()
    yield
    cache_clear()
