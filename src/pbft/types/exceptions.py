"""
Exception hierarchy for node configuration.

Two categories matter during startup:

- Transient: a settings service failed to answer. Retried, never surfaced.
- Fatal: the merged configuration is unusable. The node must not start.

Fatal errors derive from `BaseException` rather than `Exception`. A broad
`except Exception` in a caller cannot swallow them, so a misconfigured node
cannot silently continue with a partially valid record. The process entry
point is expected to exit when one reaches it.
"""

from __future__ import annotations

from datetime import timedelta


class FatalConfigError(BaseException):
    """
    Base class for unrecoverable configuration errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class MissingSettingError(FatalConfigError):
    """
    Raised when a required setting is absent at the reference point.

    Attributes:
        key: The setting key that was not found.
    """

    def __init__(self, key: str, *, detail: str | None = None) -> None:
        self.key = key
        self.detail = detail

        msg = f"'{key}' is empty"
        if detail:
            msg = f"{msg}; {detail}"

        super().__init__(msg)


class InvalidSettingError(FatalConfigError):
    """
    Raised when a required setting is present but cannot be parsed.

    Attributes:
        key: The setting key holding the bad value.
        value: The offending value (truncated for display).
        detail: Description of what went wrong.
    """

    def __init__(self, key: str, value: str, detail: str) -> None:
        self.key = key
        self.value = value
        self.detail = detail

        value_repr = repr(value)
        if len(value_repr) > 80:
            value_repr = value_repr[:77] + "..."

        super().__init__(f"Unable to parse value {value_repr} at '{key}': {detail}")


class EmptyMembershipError(FatalConfigError):
    """
    Raised when the member list decodes to zero peers.

    Attributes:
        key: The setting key holding the member list.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"'{key}' lists no members; at least one peer is required")


class TimingInvariantError(FatalConfigError):
    """
    Raised when the block publishing delay is not shorter than the idle timeout.

    A node whose idle timeout fires before the primary can publish would
    start view changes against a healthy primary.

    Attributes:
        block_publishing_delay: The merged publishing delay.
        idle_timeout: The merged idle timeout.
    """

    def __init__(self, block_publishing_delay: timedelta, idle_timeout: timedelta) -> None:
        self.block_publishing_delay = block_publishing_delay
        self.idle_timeout = idle_timeout

        super().__init__(
            f"Block publishing delay ({block_publishing_delay}) must be less than "
            f"the idle timeout ({idle_timeout})"
        )


class SettingsUnavailableError(FatalConfigError):
    """
    Raised when settings could not be fetched before the caller's deadline.

    Only possible when a timeout was requested; the default load retries
    forever.

    Attributes:
        attempts: Number of requests made.
        last_error: The failure of the final request.
    """

    def __init__(self, attempts: int, last_error: BaseException | None) -> None:
        self.attempts = attempts
        self.last_error = last_error

        super().__init__(
            f"Settings unavailable after {attempts} attempt(s); last error: {last_error!r}"
        )


class SettingsServiceError(Exception):
    """Raised by a settings service that cannot answer right now."""


class RetryDeadlineExceeded(TimeoutError):
    """
    Raised when a retried operation runs out of time.

    Attributes:
        attempts: Number of calls made.
        last_error: The exception raised by the final call.
    """

    def __init__(self, attempts: int, last_error: Exception) -> None:
        self.attempts = attempts
        self.last_error = last_error

        super().__init__(f"Gave up after {attempts} attempt(s): {last_error!r}")
