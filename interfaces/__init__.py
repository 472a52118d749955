"""
Abstract interfaces for library registry components.
Provides contracts for dependency injection and the plugin system.
"""

from .ilibrary import ILibrary, LibraryState
from .iidentity_manager import IIdentityManager, Account
from .ichange_source import IChangeSource, ChangeReason, FileChangeConsumer

__all__ = [
    'ILibrary',
    'LibraryState',
    'IIdentityManager',
    'Account',
    'IChangeSource',
    'ChangeReason',
    'FileChangeConsumer'
]
