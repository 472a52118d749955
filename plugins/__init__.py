"""
Plugin system mapping library type tags to library implementations.
"""

from .registry import LibraryTypeRegistry, LibraryConstructor

__all__ = ['LibraryTypeRegistry', 'LibraryConstructor']
