"""
Python SDK for the library registry API.
Provides a programmatic client for remote processes.
"""

import requests
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field

@dataclass
class LibraryDescription:
    """A library as reported by the registry API."""
    name: str
    type: str
    state: str

@dataclass
class VerifiedAccount:
    """An account accepted by a realm connector."""
    name: str
    roles: List[str] = field(default_factory=list)

class LibraryRegistryClientError(Exception):
    """Raised when the API request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

class LibraryRegistryClient:
    """Python SDK client for the library registry API."""

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 10.0):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the registry API server
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Any:
        """Make HTTP request to the API."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise LibraryRegistryClientError(f"API request failed: {e}", status_code) from e
        except requests.exceptions.RequestException as e:
            raise LibraryRegistryClientError(f"API request failed: {e}") from e

    def list_libraries(self) -> Dict[str, str]:
        """
        List registered libraries.

        Returns:
            Dictionary of library name to type tag
        """
        return self._make_request("GET", "/libraries")

    def get_library(self, name: str) -> Optional[LibraryDescription]:
        """
        Describe a library.

        Returns:
            The description, or None if the library is not registered
        """
        try:
            response = self._make_request("GET", f"/libraries/{name}")
        except LibraryRegistryClientError as e:
            if e.status_code == 404:
                return None
            raise
        return LibraryDescription(name=response["name"], type=response["type"], state=response["state"])

    def list_types(self) -> Dict[str, str]:
        return self._make_request("GET", "/types")

    def verify(self, realm: str, account_id: str, credential: str) -> Optional[VerifiedAccount]:
        """
        Verify a credential against a realm connector.

        Returns:
            The verified account, or None if the credential was rejected
        """
        payload = {"account_id": account_id, "credential": credential}
        try:
            response = self._make_request("POST", f"/realms/{realm}/verify", json=payload)
        except LibraryRegistryClientError as e:
            if e.status_code == 401:
                return None
            raise
        return VerifiedAccount(name=response["name"], roles=response.get("roles", []))

    def health_check(self) -> Dict[str, Any]:
        return self._make_request("GET", "/health")
