"""
Initial configuration for a PBFT node.

A node starts from compiled-in defaults and overrides them with on-chain
settings read at a specific block. Every node reading at the same block
ends up with the same configuration.

Loading is fail-fast. A node that cannot identify the network's members,
or whose timeouts contradict each other, must not join the network: doing
so could stall or desynchronize it. Such problems raise a
`FatalConfigError` that the process entry point turns into an exit.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Annotated

from pydantic import Field

from pbft.settings import SettingsService, keys
from pbft.timing import retry_until_ok
from pbft.types import (
    BlockId,
    CamelModel,
    PeerId,
    RetryDeadlineExceeded,
    SettingsUnavailableError,
    TimingInvariantError,
    Uint64,
)

from .members import get_members_from_settings
from .merge import merge_setting_if_set, parse_count, parse_millis, parse_secs

logger = logging.getLogger(__name__)

Duration = Annotated[timedelta, Field(ge=timedelta(0))]
"""A non-negative span of time."""


class PbftConfig(CamelModel):
    """
    Operating parameters of a PBFT node.

    Created once with defaults, then loaded once from on-chain settings at
    startup. After loading, the record belongs to the consensus engine and
    is treated as read-only.
    """

    members: list[PeerId] = Field(default_factory=list)
    """
    Members of the PBFT network, in on-chain order.

    No default: always read from on-chain settings.
    """

    block_publishing_delay: Duration = timedelta(milliseconds=200)
    """How long to wait in between trying to publish blocks."""

    update_recv_timeout: Duration = timedelta(milliseconds=10)
    """How long to wait for an update to arrive from the validator."""

    exponential_retry_base: Duration = timedelta(milliseconds=100)
    """The base time to use for retrying with exponential backoff."""

    exponential_retry_max: Duration = timedelta(seconds=60)
    """The maximum time for retrying with exponential backoff."""

    idle_timeout: Duration = timedelta(seconds=30)
    """
    How long to wait for the next BlockNew + PrePrepare before determining
    the primary is faulty.

    Must be longer than `block_publishing_delay`.
    """

    commit_timeout: Duration = timedelta(seconds=30)
    """
    How long to wait (after Pre-Preparing) for the node to commit the block
    before starting a view change.

    Guarantees liveness by letting the network get "unstuck" if it is unable
    to commit a block.
    """

    view_change_duration: Duration = timedelta(seconds=5)
    """
    When view changing, how long to wait for a valid NewView message before
    starting a different view change.
    """

    forced_view_change_period: Uint64 = Uint64(30)
    """How many blocks to commit before forcing a view change for fairness."""

    max_log_size: Uint64 = Uint64(1000)
    """How large the PBFT log is allowed to get before being pruned."""

    storage: str = "memory"
    """Where to store PBFT state. Operator-set; never read from the chain."""

    @classmethod
    def with_defaults(cls) -> PbftConfig:
        """Create a configuration holding the compiled-in defaults."""
        return cls()

    def load_settings(
        self,
        block_id: BlockId,
        service: SettingsService,
        *,
        timeout: timedelta | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Load configuration from on-chain settings at `block_id`.

        Configuration loads the following settings:

        - `sawtooth.consensus.pbft.members` (required)
        - `sawtooth.consensus.pbft.block_publishing_delay` (optional, default 200 ms)
        - `sawtooth.consensus.pbft.idle_timeout` (optional, default 30 s)
        - `sawtooth.consensus.pbft.commit_timeout` (optional, default 30 s)
        - `sawtooth.consensus.pbft.view_change_duration` (optional, default 5 s)
        - `sawtooth.consensus.pbft.forced_view_change_period` (optional, default 30 blocks)

        Optional settings that are unset or malformed leave the current value.

        The settings request is retried with exponential backoff until it
        succeeds. Wrap the call or pass `timeout` to bound the wait.

        Args:
            block_id: Block whose state the settings are read from.
            service: Settings service to query.
            timeout: Optional bound on the time spent fetching settings.
            sleep: Blocking sleep used between retries (injectable for testing).
            clock: Monotonic time source that `timeout` is measured against.

        Raises:
            MissingSettingError: If the members setting is not provided.
            InvalidSettingError: If the members setting is malformed.
            EmptyMembershipError: If the members setting lists no peers.
            TimingInvariantError: If the block publishing delay is not less
                than the idle timeout.
            SettingsUnavailableError: If `timeout` elapses before the
                service answers.
        """
        logger.debug("Getting on-chain settings for config at block %s", block_id.hex())
        try:
            settings = retry_until_ok(
                self.exponential_retry_base,
                self.exponential_retry_max,
                lambda: service.get_settings(block_id, keys.REQUESTED_KEYS),
                timeout=timeout,
                sleep=sleep,
                clock=clock,
            )
        except RetryDeadlineExceeded as e:
            raise SettingsUnavailableError(e.attempts, e.last_error) from e

        # Members first: nothing else matters if the network has no roster.
        self.members = get_members_from_settings(settings)

        # Durations
        self.block_publishing_delay = merge_setting_if_set(
            settings, keys.BLOCK_PUBLISHING_DELAY, self.block_publishing_delay, parse_millis
        )
        self.idle_timeout = merge_setting_if_set(
            settings, keys.IDLE_TIMEOUT, self.idle_timeout, parse_secs
        )
        self.commit_timeout = merge_setting_if_set(
            settings, keys.COMMIT_TIMEOUT, self.commit_timeout, parse_secs
        )
        self.view_change_duration = merge_setting_if_set(
            settings, keys.VIEW_CHANGE_DURATION, self.view_change_duration, parse_secs
        )

        if self.block_publishing_delay >= self.idle_timeout:
            raise TimingInvariantError(self.block_publishing_delay, self.idle_timeout)

        # Integer constants
        self.forced_view_change_period = merge_setting_if_set(
            settings,
            keys.FORCED_VIEW_CHANGE_PERIOD,
            self.forced_view_change_period,
            parse_count,
        )

        logger.info(
            "Loaded PBFT config: %d members, idle timeout %s, commit timeout %s",
            len(self.members),
            self.idle_timeout,
            self.commit_timeout,
        )

    load = load_settings
