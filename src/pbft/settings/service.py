"""
Settings service interface and a static in-memory implementation.

The validator answers settings queries against ledger state at a given
block. Reading at a fixed block makes configuration reproducible: every
node that reads at the same block sees the same values.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

import yaml
from pydantic import Field, field_validator

from pbft.types import BlockId, StrictBaseModel


class SettingsService(Protocol):
    """
    Protocol for reading on-chain settings.

    Uses structural subtyping - any class with a matching method satisfies it.
    """

    def get_settings(self, block_id: BlockId, keys: Sequence[str]) -> Mapping[str, str]:
        """
        Read settings as they exist at a block.

        Args:
            block_id: Block whose state is read.
            keys: Setting keys to look up.

        Returns:
            Values for the subset of `keys` that are set. Unset keys are omitted.

        Raises:
            Exception: Any failure. Callers treat it as transient.
        """
        ...


class SettingsSnapshot(StrictBaseModel):
    """
    A fixed set of setting values.

    Ledger state stores every setting as a string. YAML written by hand is
    looser, so scalars are converted with `str()` and lists or mappings are
    JSON-encoded. A YAML list of hex strings under the members key therefore
    becomes the JSON array the node expects.
    """

    values: dict[str, str] = Field(default_factory=dict)
    """Setting values keyed by their full key."""

    @field_validator("values", mode="before")
    @classmethod
    def stringify_values(cls, v: Any) -> dict[str, str]:
        """
        Render every value in its on-chain string form.

        A key written with no value (YAML null) is treated as unset.
        """
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError(f"settings must be a mapping, got {type(v).__name__}")

        result = {}
        for key, value in v.items():
            if value is None:
                continue
            if isinstance(value, str):
                result[str(key)] = value
            elif isinstance(value, (list, dict)):
                result[str(key)] = json.dumps(value)
            else:
                result[str(key)] = str(value)
        return result

    @classmethod
    def from_yaml(cls, content: str) -> SettingsSnapshot:
        """
        Load a snapshot from a YAML string.

        The document must be a mapping from setting key to value.
        An empty document is an empty snapshot.

        Raises:
            yaml.YAMLError: If the content is not valid YAML.
            pydantic.ValidationError: If the document is not a mapping.
        """
        return cls(values=yaml.safe_load(content))

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> SettingsSnapshot:
        """
        Load a snapshot from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the document is not a mapping.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            return cls(values=yaml.safe_load(f))


class StaticSettingsService:
    """
    Settings service backed by a fixed snapshot.

    Answers every block with the same values. Useful for running a node
    against a hand-written settings file and for testing.
    """

    def __init__(self, snapshot: SettingsSnapshot | Mapping[str, Any] | None = None) -> None:
        """Initialize from a snapshot or a plain mapping of settings."""
        if not isinstance(snapshot, SettingsSnapshot):
            snapshot = SettingsSnapshot(values=snapshot)
        self.snapshot = snapshot
        self.requests: list[tuple[BlockId, tuple[str, ...]]] = []

    def get_settings(self, block_id: BlockId, keys: Sequence[str]) -> dict[str, str]:
        """Return the snapshot's values for the requested keys that are set."""
        self.requests.append((block_id, tuple(keys)))
        values = self.snapshot.values
        return {key: values[key] for key in keys if key in values}
