"""Timing helpers for node bootstrap."""

from .backoff import backoff_delays, retry_until_ok

__all__ = ["backoff_delays", "retry_until_ok"]
