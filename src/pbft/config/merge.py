"""
Typed conversion of optional settings.

Optional settings override a field only when present and well formed.
A value that fails to parse is treated as if it were not set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import TypeVar

from pbft.types import Uint64

T = TypeVar("T")

logger = logging.getLogger(__name__)


def parse_millis(text: str) -> timedelta:
    """Parse an integer count of milliseconds."""
    return timedelta(milliseconds=Uint64.parse(text))


def parse_secs(text: str) -> timedelta:
    """Parse an integer count of seconds."""
    return timedelta(seconds=Uint64.parse(text))


def parse_count(text: str) -> Uint64:
    """Parse an unsigned integer count."""
    return Uint64.parse(text)


def merge_setting_if_set(
    settings: Mapping[str, str],
    key: str,
    current: T,
    parse: Callable[[str], T],
) -> T:
    """
    Return the parsed value of `key`, or `current` if it is unset or malformed.

    Args:
        settings: Values fetched from the settings service.
        key: Setting to look up.
        current: Value to keep when the setting does not apply.
        parse: Converter from the raw string to the field's type.
    """
    raw = settings.get(key)
    if raw is None:
        return current

    try:
        return parse(raw)
    except (ValueError, OverflowError) as e:
        # timedelta overflows past 999999999 days; treated like any bad value.
        logger.debug("Ignoring malformed setting %s=%r: %s", key, raw, e)
        return current
