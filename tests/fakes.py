"""
Library implementations used by the tests.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from core.exceptions import LibraryLoadError
from interfaces import Account, IIdentityManager, ILibrary
from plugins.registry import LibraryTypeRegistry


class RecordingLibrary(ILibrary):
    """Counts lifecycle calls; options can make load or close fail."""

    description = "Recording test library"

    def __init__(self, name: str, options: Dict[str, Any], data_directory: Optional[Path] = None):
        self.name = name
        self.options = options
        self.data_directory = data_directory
        self.load_count = 0
        self.close_count = 0

    def load(self) -> None:
        self.load_count += 1
        if self.options.get("fail_load"):
            raise LibraryLoadError(f"{self.name} refused to load")

    def close(self) -> None:
        self.close_count += 1
        if self.options.get("fail_close"):
            raise RuntimeError(f"{self.name} refused to close")


class TypeA(RecordingLibrary):
    pass


class TypeB(RecordingLibrary):
    pass


class TypeC(RecordingLibrary):
    pass


class RealmLibrary(RecordingLibrary, IIdentityManager):
    """Accepts any account whose credential is "secret"."""

    def verify(self, account_id: str, credential: str) -> Optional[Account]:
        if credential != "secret":
            return None
        return Account(name=account_id, roles=frozenset({"user"}))

    def verify_account(self, account: Account) -> Optional[Account]:
        return account


class BrokenLibrary(RecordingLibrary):
    """Constructor always fails."""

    def __init__(self, name: str, options: Dict[str, Any], data_directory: Optional[Path] = None):
        raise ValueError(f"{name} is misconfigured")


def build_type_registry() -> LibraryTypeRegistry:
    type_registry = LibraryTypeRegistry(discover=False)
    type_registry.register_type("type_a", TypeA, "A")
    type_registry.register_type("type_b", TypeB, "B")
    type_registry.register_type("type_c", TypeC, "C")
    type_registry.register_type("realm", RealmLibrary, "Realm")
    type_registry.register_type("broken", BrokenLibrary, "Broken")
    return type_registry
