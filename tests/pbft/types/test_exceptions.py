"""Tests for the configuration error hierarchy."""

from __future__ import annotations

from datetime import timedelta

import pytest

from pbft.types import (
    EmptyMembershipError,
    FatalConfigError,
    InvalidSettingError,
    MissingSettingError,
    RetryDeadlineExceeded,
    SettingsServiceError,
    SettingsUnavailableError,
    TimingInvariantError,
)


class TestFatalCategory:
    """Fatal errors must not be caught by generic handlers."""

    @pytest.mark.parametrize(
        "error",
        [
            MissingSettingError("k"),
            InvalidSettingError("k", "v", "bad"),
            EmptyMembershipError("k"),
            TimingInvariantError(timedelta(seconds=1), timedelta(seconds=1)),
            SettingsUnavailableError(3, None),
        ],
    )
    def test_fatal_errors_are_not_exceptions(self, error: FatalConfigError) -> None:
        """Every fatal error escapes `except Exception`."""
        assert isinstance(error, FatalConfigError)
        assert not isinstance(error, Exception)

    def test_except_exception_does_not_swallow(self) -> None:
        """A broad handler lets the fatal error through."""
        with pytest.raises(MissingSettingError):
            try:
                raise MissingSettingError("k")
            except Exception:  # pragma: no cover - must not run
                pytest.fail("fatal error was caught as an Exception")

    def test_transient_errors_are_exceptions(self) -> None:
        """Transient errors stay catchable and retryable."""
        assert issubclass(SettingsServiceError, Exception)
        assert issubclass(RetryDeadlineExceeded, TimeoutError)


class TestMessages:
    """Tests for human-readable messages."""

    def test_missing_setting_names_key(self) -> None:
        """The message names the absent key and the extra detail."""
        error = MissingSettingError("a.b", detail="required")
        assert error.message == "'a.b' is empty; required"
        assert error.key == "a.b"

    def test_invalid_setting_names_key_and_value(self) -> None:
        """The message names the key, the value and the cause."""
        error = InvalidSettingError("a.b", "not json", "invalid JSON")
        assert "'a.b'" in error.message
        assert "'not json'" in error.message
        assert "invalid JSON" in error.message

    def test_invalid_setting_truncates_long_values(self) -> None:
        """Long values are shortened for display but kept in full on the error."""
        value = "x" * 500
        error = InvalidSettingError("a.b", value, "bad")
        assert error.value == value
        assert "..." in error.message
        assert len(error.message) < 200

    def test_timing_invariant_names_both_values(self) -> None:
        """The message shows the publishing delay and the idle timeout."""
        error = TimingInvariantError(timedelta(seconds=40), timedelta(seconds=30))
        assert "0:00:40" in error.message
        assert "0:00:30" in error.message

    def test_repr(self) -> None:
        """Repr shows the class and message."""
        assert repr(EmptyMembershipError("k")).startswith("EmptyMembershipError('")

    def test_settings_unavailable_reports_attempts(self) -> None:
        """The message counts attempts and shows the last failure."""
        error = SettingsUnavailableError(4, SettingsServiceError("down"))
        assert "4 attempt(s)" in error.message
        assert "down" in error.message
