"""Node configuration loaded from defaults and on-chain settings."""

from .config import PbftConfig
from .members import get_members_from_settings
from .merge import merge_setting_if_set, parse_count, parse_millis, parse_secs

__all__ = [
    "PbftConfig",
    "get_members_from_settings",
    "merge_setting_if_set",
    "parse_count",
    "parse_millis",
    "parse_secs",
]
