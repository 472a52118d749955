"""
Dependency injection container and factories for registry components.
"""

from .container import DIContainer
from .factories import ComponentFactory

__all__ = ['DIContainer', 'ComponentFactory']
