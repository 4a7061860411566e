"""Reusable type definitions for PBFT node configuration."""

from .base import CamelModel, StrictBaseModel
from .byte_arrays import BlockId, OpaqueBytes, PeerId
from .exceptions import (
    EmptyMembershipError,
    FatalConfigError,
    InvalidSettingError,
    MissingSettingError,
    RetryDeadlineExceeded,
    SettingsServiceError,
    SettingsUnavailableError,
    TimingInvariantError,
)
from .uint import Uint64

__all__ = [
    # Core types
    "Uint64",
    "OpaqueBytes",
    "PeerId",
    "BlockId",
    "CamelModel",
    "StrictBaseModel",
    # Exceptions
    "FatalConfigError",
    "MissingSettingError",
    "InvalidSettingError",
    "EmptyMembershipError",
    "TimingInvariantError",
    "SettingsUnavailableError",
    "SettingsServiceError",
    "RetryDeadlineExceeded",
]
