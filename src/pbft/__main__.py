"""
PBFT node configuration CLI entry point.

Resolve the configuration a PBFT node would start with, reading on-chain
settings from a YAML snapshot instead of a live validator.

Usage::

    python -m pbft --settings settings.yaml --block-id 00ff
    python -m pbft --settings settings.yaml --block-id 00ff --storage disk+/var/lib/pbft
    python -m pbft --settings settings.yaml --block-id 00ff --timeout 10 -v

Options:
    --settings   Path to YAML settings snapshot (required)
    --block-id   Hex identifier of the block to read settings at (required)
    --storage    Where PBFT state is stored (default: memory)
    --timeout    Give up fetching settings after this many seconds (default: never)

The resolved configuration is printed as JSON. A fatal configuration error
is logged and the process exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import timedelta
from pathlib import Path

from pbft.config import PbftConfig
from pbft.settings import SettingsSnapshot, StaticSettingsService
from pbft.types import BlockId, FatalConfigError

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as colored `time level name: message`."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging to stderr with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def parse_block_id(value: str) -> BlockId:
    """Argparse type for hex block identifiers."""
    try:
        return BlockId.from_hex(value.removeprefix("0x"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def positive_seconds(value: str) -> timedelta:
    """Argparse type for a positive number of seconds."""
    try:
        seconds = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value!r}") from e
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive, got {value}")
    return timedelta(seconds=seconds)


def resolve_config(
    settings_path: Path,
    block_id: BlockId,
    storage: str | None = None,
    timeout: timedelta | None = None,
) -> PbftConfig:
    """
    Build the configuration a node would start with.

    Args:
        settings_path: YAML snapshot of on-chain settings.
        block_id: Block to read settings at.
        storage: Operator override for the storage location.
        timeout: Optional bound on the time spent fetching settings.

    Raises:
        FatalConfigError: If the loaded configuration is unusable.
    """
    logger.info("Loading settings snapshot from %s", settings_path)
    service = StaticSettingsService(SettingsSnapshot.from_yaml_file(settings_path))

    config = PbftConfig.with_defaults()
    if storage is not None:
        config.storage = storage

    config.load_settings(block_id, service, timeout=timeout)
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="pbft",
        description="Resolve PBFT node configuration from on-chain settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--settings",
        required=True,
        type=Path,
        help="Path to YAML settings snapshot",
    )
    parser.add_argument(
        "--block-id",
        required=True,
        type=parse_block_id,
        help="Hex identifier of the block to read settings at",
    )
    parser.add_argument(
        "--storage",
        type=str,
        default=None,
        help="Where PBFT state is stored (default: memory)",
    )
    parser.add_argument(
        "--timeout",
        type=positive_seconds,
        default=None,
        help="Give up fetching settings after this many seconds (default: never)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        config = resolve_config(args.settings, args.block_id, args.storage, args.timeout)
    except FatalConfigError as e:
        # An improperly configured node must not join the network.
        logger.critical("Fatal configuration error: %s", e.message)
        return 1

    sys.stdout.write(config.model_dump_json(by_alias=True, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
