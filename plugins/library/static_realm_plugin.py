"""
Realm connector backed by a static list of users.
"""

import hashlib
import hmac
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from interfaces import Account, IIdentityManager, ILibrary

logger = logging.getLogger(__name__)


class StaticRealmLibrary(ILibrary, IIdentityManager):
    """
    Identity manager declared inline in the configuration file.

    Users are declared as::

        "users": {"alice": {"password": "...", "roles": ["admin"]}}

    A "password_sha256" hex digest may be given instead of "password".
    """

    description = "Static realm connector (identity manager)"

    def __init__(self, name: str, options: Dict[str, Any], data_directory: Optional[Path] = None):
        users = options.get("users", {})
        if not isinstance(users, dict):
            raise ValueError(f"'users' of realm {name} must be an object")

        self.name = name
        self._declared: Dict[str, Dict[str, Any]] = {}
        for user, entry in users.items():
            if not isinstance(entry, dict):
                raise ValueError(f"User {user} of realm {name} must be an object")
            if "password_sha256" in entry:
                digest = str(entry["password_sha256"]).lower()
            elif "password" in entry:
                digest = _sha256(str(entry["password"]))
            else:
                raise ValueError(f"User {user} of realm {name} has no password")
            self._declared[user] = {
                "digest": digest,
                "roles": frozenset(entry.get("roles", [])),
            }
        self._users: Dict[str, Dict[str, Any]] = {}

    def load(self) -> None:
        self._users = dict(self._declared)
        logger.debug(f"Realm {self.name} loaded {len(self._users)} users")

    def close(self) -> None:
        self._users = {}

    def verify(self, account_id: str, credential: str) -> Optional[Account]:
        user = self._users.get(account_id)
        if user is None:
            return None
        if not hmac.compare_digest(user["digest"], _sha256(credential)):
            return None
        return Account(name=account_id, roles=user["roles"])

    def verify_account(self, account: Account) -> Optional[Account]:
        user = self._users.get(account.name)
        if user is None:
            return None
        return Account(name=account.name, roles=user["roles"])


def _sha256(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


LIBRARY_CLASS = StaticRealmLibrary
