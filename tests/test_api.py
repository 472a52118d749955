"""
Tests for the REST API and its Python client.
"""

from unittest.mock import Mock

import pytest
import requests
from fastapi.testclient import TestClient

from apis import create_app
from apis.sdk import LibraryDescription, LibraryRegistryClient, LibraryRegistryClientError, VerifiedAccount
from interfaces import ChangeReason


@pytest.fixture
def client(registry, write_config):
    registry.on_file_event(ChangeReason.UPDATED, write_config("a.json", {
        "x": {"type": "type_a"},
        "users": {"type": "realm"},
    }))
    return TestClient(create_app(registry))


class TestRoutes:
    """Test API endpoints."""

    def test_list_libraries(self, client):
        """Test listing libraries over HTTP."""
        response = client.get("/libraries")

        assert response.status_code == 200
        assert response.json() == {"users": "realm", "x": "type_a"}

    def test_get_library(self, client):
        """Test fetching a single library with its state."""
        response = client.get("/libraries/x")

        assert response.status_code == 200
        assert response.json() == {"name": "x", "type": "type_a", "state": "loaded"}

    def test_get_missing_library(self, client):
        """Test 404 for an unknown library."""
        assert client.get("/libraries/nope").status_code == 404

    def test_list_types(self, client):
        """Test listing registered library types."""
        response = client.get("/types")

        assert response.status_code == 200
        assert "realm" in response.json()

    def test_health(self, client):
        """Test health endpoint reports library count."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["libraries"] == 2
        assert data["files"] == 1

    def test_verify_credential(self, client):
        """Test successful credential verification."""
        response = client.post("/realms/users/verify", json={"account_id": "alice", "credential": "secret"})

        assert response.status_code == 200
        assert response.json() == {"name": "alice", "roles": ["user"]}

    def test_verify_rejected(self, client):
        """Test rejected credential returns no account."""
        response = client.post("/realms/users/verify", json={"account_id": "alice", "credential": "bad"})

        assert response.status_code == 401

    def test_verify_unknown_realm(self, client):
        """Test 404 for an unknown realm."""
        response = client.post("/realms/nope/verify", json={"account_id": "alice", "credential": "secret"})

        assert response.status_code == 404

    def test_verify_not_a_realm(self, client):
        """Test 400 for a library that is not a realm connector."""
        response = client.post("/realms/x/verify", json={"account_id": "alice", "credential": "secret"})

        assert response.status_code == 400


def _response(status_code=200, payload=None):
    response = Mock(status_code=status_code)
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    return response


class TestLibraryRegistryClient:
    """Test the Python SDK against mocked HTTP responses."""

    @pytest.fixture
    def sdk(self):
        sdk = LibraryRegistryClient("http://registry:8000/")
        sdk.session = Mock()
        return sdk

    def test_list_libraries(self, sdk):
        """Test client lists libraries."""
        sdk.session.request.return_value = _response(payload={"x": "type_a"})

        assert sdk.list_libraries() == {"x": "type_a"}
        sdk.session.request.assert_called_once_with("GET", "http://registry:8000/libraries", timeout=10.0)

    def test_get_library(self, sdk):
        """Test client fetches a library."""
        sdk.session.request.return_value = _response(payload={"name": "x", "type": "type_a", "state": "loaded"})

        assert sdk.get_library("x") == LibraryDescription(name="x", type="type_a", state="loaded")

    def test_get_missing_library(self, sdk):
        """Test client returns None for a missing library."""
        sdk.session.request.return_value = _response(status_code=404)

        assert sdk.get_library("x") is None

    def test_verify(self, sdk):
        """Test client verifies a credential."""
        sdk.session.request.return_value = _response(payload={"name": "alice", "roles": ["user"]})

        assert sdk.verify("users", "alice", "secret") == VerifiedAccount(name="alice", roles=["user"])

    def test_verify_rejected(self, sdk):
        """Test client handles a rejected credential."""
        sdk.session.request.return_value = _response(status_code=401)

        assert sdk.verify("users", "alice", "bad") is None

    def test_server_error_raises(self, sdk):
        """Test server error is raised to the caller."""
        sdk.session.request.return_value = _response(status_code=500)

        with pytest.raises(LibraryRegistryClientError) as excinfo:
            sdk.list_types()
        assert excinfo.value.status_code == 500

    def test_connection_error_raises(self, sdk):
        """Test connection error is raised to the caller."""
        sdk.session.request.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(LibraryRegistryClientError):
            sdk.health_check()
