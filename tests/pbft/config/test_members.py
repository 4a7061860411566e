"""Tests for decoding the on-chain member list."""

from __future__ import annotations

import json

import pytest

from pbft.config import get_members_from_settings
from pbft.settings import keys
from pbft.types import (
    EmptyMembershipError,
    InvalidSettingError,
    MissingSettingError,
    PeerId,
)
from tests.pbft.helpers import PEER_HEX, make_members_value


class TestValidMembers:
    """Tests for well-formed member lists."""

    def test_decodes_in_order(self) -> None:
        """Members come back as PeerIds in on-chain order."""
        members = get_members_from_settings({keys.MEMBERS: make_members_value()})

        assert members == [bytes.fromhex(h) for h in PEER_HEX]
        assert all(isinstance(member, PeerId) for member in members)

    def test_duplicates_are_kept(self) -> None:
        """Repeated identifiers are not deduplicated."""
        value = make_members_value(["01", "02", "01"])

        members = get_members_from_settings({keys.MEMBERS: value})

        assert members == [b"\x01", b"\x02", b"\x01"]

    def test_other_settings_ignored(self) -> None:
        """Only the members key is read."""
        settings = {keys.MEMBERS: make_members_value(["ab"]), keys.IDLE_TIMEOUT: "junk"}
        assert get_members_from_settings(settings) == [b"\xab"]


class TestInvalidMembers:
    """Every problem with the member list is fatal."""

    def test_missing_key(self) -> None:
        """An unset members key is fatal regardless of other keys."""
        with pytest.raises(MissingSettingError) as exc_info:
            get_members_from_settings({keys.IDLE_TIMEOUT: "30"})

        assert exc_info.value.key == keys.MEMBERS
        assert keys.MEMBERS in exc_info.value.message

    def test_not_json(self) -> None:
        """A value that is not JSON is fatal."""
        with pytest.raises(InvalidSettingError) as exc_info:
            get_members_from_settings({keys.MEMBERS: "not json"})

        assert exc_info.value.key == keys.MEMBERS
        assert exc_info.value.value == "not json"

    @pytest.mark.parametrize(
        "value",
        [
            json.dumps({"a": "01"}),  # object
            json.dumps("01"),  # bare string
            json.dumps([1, 2]),  # numbers
            json.dumps(["01", None]),  # null element
        ],
    )
    def test_not_array_of_strings(self, value: str) -> None:
        """Valid JSON of the wrong shape is fatal."""
        with pytest.raises(InvalidSettingError):
            get_members_from_settings({keys.MEMBERS: value})

    @pytest.mark.parametrize("member", ["zz", "abc", "0x01", " 01"])
    def test_non_hex_member(self, member: str) -> None:
        """Any element that is not hex is fatal."""
        value = make_members_value(["01", member])

        with pytest.raises(InvalidSettingError) as exc_info:
            get_members_from_settings({keys.MEMBERS: value})

        assert "index 1" in exc_info.value.detail

    def test_empty_array(self) -> None:
        """A network with no members cannot run."""
        with pytest.raises(EmptyMembershipError):
            get_members_from_settings({keys.MEMBERS: "[]"})
