"""
On-chain setting keys read by a PBFT node.

All keys live under the `sawtooth.consensus.pbft` namespace. Values are
strings in ledger state; the unit of each is fixed by its key.
"""

from typing import Final

NAMESPACE: Final = "sawtooth.consensus.pbft"
"""Common prefix of every PBFT setting."""

MEMBERS: Final = f"{NAMESPACE}.members"
"""JSON array of hex-encoded peer identifiers. Required."""

BLOCK_PUBLISHING_DELAY: Final = f"{NAMESPACE}.block_publishing_delay"
"""Integer milliseconds between attempts to publish a block."""

IDLE_TIMEOUT: Final = f"{NAMESPACE}.idle_timeout"
"""Integer seconds to wait for the next block before suspecting the primary."""

COMMIT_TIMEOUT: Final = f"{NAMESPACE}.commit_timeout"
"""Integer seconds to wait for a pre-prepared block to commit."""

VIEW_CHANGE_DURATION: Final = f"{NAMESPACE}.view_change_duration"
"""Integer seconds to wait for a NewView before starting the next view change."""

FORCED_VIEW_CHANGE_PERIOD: Final = f"{NAMESPACE}.forced_view_change_period"
"""Integer count of committed blocks between forced view changes."""

STORAGE: Final = f"{NAMESPACE}.storage"
"""
Where protocol state is persisted.

Operator-set only. It is never requested from the ledger.
"""

REQUESTED_KEYS: Final[tuple[str, ...]] = (
    MEMBERS,
    BLOCK_PUBLISHING_DELAY,
    IDLE_TIMEOUT,
    COMMIT_TIMEOUT,
    VIEW_CHANGE_DURATION,
    FORCED_VIEW_CHANGE_PERIOD,
)
"""Keys requested, in a single call, when loading the node configuration."""
