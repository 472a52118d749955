"""
Dependency injection container for wiring the application root.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Type, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)


class DIContainer:
    """Dependency injection container for component management."""

    def __init__(self):
        """Initialize the DI container."""
        self._factories: Dict[Type, Callable[[], Any]] = {}
        self._singleton_types: set = set()
        self._instances: Dict[Type, Any] = {}
        # Creation order, so teardown can run in reverse
        self._created: List[Any] = []
        self._lock = threading.RLock()

    def register_factory(self, interface: Type[T], factory: Callable[[], T],
                         singleton: bool = True) -> None:
        """
        Register a factory function for service creation.

        Args:
            interface: Type used as lookup key
            factory: Zero-argument callable returning the implementation
            singleton: Create once and reuse the instance
        """
        with self._lock:
            self._factories[interface] = factory
            if singleton:
                self._singleton_types.add(interface)
            else:
                self._singleton_types.discard(interface)

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """
        Register a pre-created instance.

        Args:
            interface: Type used as lookup key
            instance: Pre-created instance
        """
        with self._lock:
            self._instances[interface] = instance

    def resolve(self, interface: Type[T]) -> T:
        """
        Resolve a service implementation.

        Args:
            interface: Type to resolve

        Returns:
            Service implementation instance

        Raises:
            ValueError: If service not registered
        """
        with self._lock:
            if interface in self._instances:
                return self._instances[interface]

            factory = self._factories.get(interface)
            if factory is None:
                raise ValueError(f"Service not registered: {interface}")

            instance = factory()
            if interface in self._singleton_types:
                self._instances[interface] = instance
                self._created.append(instance)
            return instance

    def has_service(self, interface: Type[T]) -> bool:
        with self._lock:
            return interface in self._instances or interface in self._factories

    def shutdown(self) -> None:
        """Close created singletons in reverse creation order, then forget them."""
        with self._lock:
            created, self._created = self._created, []
            for interface in [key for key, value in self._instances.items()
                              if any(value is instance for instance in created)]:
                del self._instances[interface]

        for instance in reversed(created):
            for method in ('stop', 'close'):
                teardown = getattr(instance, method, None)
                if callable(teardown):
                    try:
                        teardown()
                    except Exception as e:
                        logger.error(f"Failed to {method} {type(instance).__name__}: {e}")
                    break

    def clear(self) -> None:
        """Clear all registered services without tearing them down."""
        with self._lock:
            self._factories.clear()
            self._singleton_types.clear()
            self._instances.clear()
            self._created.clear()
