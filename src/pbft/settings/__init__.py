"""
Settings module for reading on-chain configuration.

Defines the service boundary a node reads its configuration through,
and the setting keys it reads.
"""

from . import keys
from .service import SettingsService, SettingsSnapshot, StaticSettingsService

__all__ = [
    "keys",
    "SettingsService",
    "SettingsSnapshot",
    "StaticSettingsService",
]
