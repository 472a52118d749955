"""
Abstract interface for sources of configuration file change notifications.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Callable


class ChangeReason(Enum):
    """Kind of change observed on a configuration file."""

    UPDATED = "updated"
    DELETED = "deleted"


FileChangeConsumer = Callable[[ChangeReason, Path], None]


class IChangeSource(ABC):
    """Abstract interface for file change notification delivery."""

    @abstractmethod
    def register(self, consumer: FileChangeConsumer) -> None:
        """
        Register a consumer for change events.

        Args:
            consumer: Callable invoked with (reason, path) for every event
        """
        pass

    @abstractmethod
    def unregister(self, consumer: FileChangeConsumer) -> None:
        """Stop delivering events to a consumer."""
        pass

    @abstractmethod
    def check(self) -> None:
        """Flush any pending change notifications to the registered consumers."""
        pass
