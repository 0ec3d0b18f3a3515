# tests/test_health.py

from fastapi.testclient import TestClient
from unittest.mock import Mock, patch

from models.enums import Module


def test_health_app(client: TestClient):
    response = client.get("/health/app")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["modules"] == len(Module)
    assert data["roles_with_defaults"] == 8


def test_health_db_not_configured(client: TestClient):
    with patch("core.supabase_client.get_supabase_client", return_value=None):
        response = client.get("/health/db")

    assert response.status_code == 200
    assert response.json()["status"] == "not_configured"


def test_health_db_ok(client: TestClient):
    mock_client = Mock()
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = Mock(
        data=[{"id": "row-1"}]
    )

    with patch("core.supabase_client.get_supabase_client", return_value=mock_client):
        response = client.get("/health/db")

    data = response.json()
    assert data["status"] == "ok"
    assert data["details"]["tables"]["role_permissions"]["rows_found"] == 1
