"""Decoding of the on-chain PBFT member list."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from pydantic import TypeAdapter, ValidationError

from pbft.settings import keys
from pbft.types import (
    EmptyMembershipError,
    InvalidSettingError,
    MissingSettingError,
    PeerId,
)

_MEMBERS_JSON: Final = TypeAdapter(list[str])
"""Validator for the members value: a JSON array whose elements are all strings."""


def get_members_from_settings(settings: Mapping[str, str]) -> list[PeerId]:
    """
    Get the list of PBFT members from settings.

    The network cannot function without this setting: there is no other way
    of knowing which nodes are members. Every failure here is fatal.

    Order is preserved and duplicates are kept as listed.

    Raises:
        MissingSettingError: If the members setting is unset.
        InvalidSettingError: If the value is not a JSON array of strings,
            or any element is not valid hex.
        EmptyMembershipError: If the array is empty.
    """
    raw = settings.get(keys.MEMBERS)
    if raw is None:
        raise MissingSettingError(keys.MEMBERS, detail="this setting must exist to use PBFT")

    try:
        encoded = _MEMBERS_JSON.validate_json(raw, strict=True)
    except ValidationError as e:
        errors = "; ".join(err["msg"] for err in e.errors())
        raise InvalidSettingError(keys.MEMBERS, raw, errors) from e

    members = []
    for index, member in enumerate(encoded):
        try:
            members.append(PeerId.from_hex(member))
        except ValueError as e:
            raise InvalidSettingError(
                keys.MEMBERS, raw, f"unable to parse PeerId at index {index}: {e}"
            ) from e

    if not members:
        raise EmptyMembershipError(keys.MEMBERS)

    return members
