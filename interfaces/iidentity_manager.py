"""
Abstract interface for the identity/authentication capability of a library.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class Account:
    """An authenticated principal."""
    name: str
    roles: FrozenSet[str] = field(default_factory=frozenset)


class IIdentityManager(ABC):
    """Capability exposed by realm connector libraries."""

    @abstractmethod
    def verify(self, account_id: str, credential: str) -> Optional[Account]:
        """
        Verify a credential for the given account identifier.

        Args:
            account_id: Account identifier (user name)
            credential: Secret presented by the caller

        Returns:
            The authenticated account, or None if verification failed
        """
        raise NotImplementedError("verify method must be implemented by concrete classes")

    @abstractmethod
    def verify_account(self, account: Account) -> Optional[Account]:
        """
        Re-check that a previously authenticated account is still valid.

        Args:
            account: Account returned by an earlier verify call

        Returns:
            The refreshed account, or None if it is no longer valid
        """
        raise NotImplementedError("verify_account method must be implemented by concrete classes")
