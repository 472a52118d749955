"""
Shared fixtures for the library registry tests.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

from core import library_registry
from core.library_registry import LibraryRegistry
from tests.fakes import build_type_registry


@pytest.fixture
def etc_dir(tmp_path) -> Path:
    """Configuration directory."""
    path = tmp_path / "etc"
    path.mkdir()
    return path


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """Data directory."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def type_registry():
    return build_type_registry()


@pytest.fixture
def write_config(etc_dir) -> Callable[..., Path]:
    """Write a configuration file declaring the given libraries."""

    def _write(file_name: str, libraries: Optional[Dict[str, Any]] = None, raw: Optional[str] = None) -> Path:
        path = etc_dir / file_name
        if raw is None:
            raw = json.dumps({"library": libraries})
        path.write_text(raw, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def registry(data_dir, type_registry):
    """Registry without change source; tests deliver events directly."""
    registry = LibraryRegistry(data_dir, type_registry=type_registry, file_extension="json")
    yield registry
    registry.close()


@pytest.fixture
def global_registry_cleanup():
    """Make sure the process-wide registry is reset around a test."""
    library_registry.shutdown()
    yield
    library_registry.shutdown()
