"""Test helpers for pbft unit tests."""

from __future__ import annotations

import json

from pbft.settings import keys
from pbft.types import BlockId

from .mocks import FakeClock, FlakySettingsService

TEST_BLOCK_ID = BlockId(b"\x00" * 32)
"""Reference block used by tests that do not care which block is read."""

PEER_HEX = ["aa" * 33, "bb" * 33, "cc" * 33, "dd" * 33]
"""Hex-encoded identifiers of a four-node network."""


def make_members_value(members: list[str] | None = None) -> str:
    """Encode hex member identifiers as the on-chain JSON array."""
    return json.dumps(PEER_HEX if members is None else members)


def make_settings(**overrides: str) -> dict[str, str]:
    """
    Build a settings mapping with a valid member list.

    Keyword arguments name a key by its suffix under the PBFT namespace,
    e.g. `idle_timeout="45"`.
    """
    settings = {keys.MEMBERS: make_members_value()}
    for name, value in overrides.items():
        settings[f"{keys.NAMESPACE}.{name}"] = value
    return settings


__all__ = [
    "FakeClock",
    "FlakySettingsService",
    "PEER_HEX",
    "TEST_BLOCK_ID",
    "make_members_value",
    "make_settings",
]
