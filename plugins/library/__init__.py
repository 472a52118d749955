"""
Built-in library types.
"""

from .properties_plugin import PropertiesLibrary
from .directory_plugin import DirectoryLibrary
from .static_realm_plugin import StaticRealmLibrary

__all__ = ['PropertiesLibrary', 'DirectoryLibrary', 'StaticRealmLibrary']
