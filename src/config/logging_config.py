# src/config/logging_config.py

"""Logging for the storefront CLI.

Every run writes a full DEBUG trace to its own file under
``Settings.LOGS_DIR`` (``storefront_<timestamp>.log``) and keeps only the
newest ``Settings.LOG_RETENTION`` of them. The terminal gets a Rich
handler on stderr whose level comes from ``STOREFRONT_LOG_LEVEL``, or
DEBUG when the CLI runs with ``--verbose``.
"""

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from src.config.settings import Settings

ROOT_LOGGER = "storefront"

_FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"


def resolve_console_level(verbose: bool = False) -> int:
    """Console level: DEBUG when verbose, else ``Settings.LOG_LEVEL``.

    Unknown level names fall back to WARNING.
    """
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(Settings.LOG_LEVEL)
    return level if isinstance(level, int) else logging.WARNING


def _prune_old_logs(logs_dir: Path, keep: int) -> None:
    """Delete all but the newest *keep* run logs."""
    runs = sorted(logs_dir.glob("storefront_*.log"), reverse=True)
    for stale in runs[keep:]:
        stale.unlink(missing_ok=True)


def setup_logging(verbose: bool = False) -> Path:
    """(Re)configure the ``storefront`` logger and return this run's log file.

    Handlers installed by an earlier call are closed and replaced, so the
    latest *verbose* setting always applies.
    """
    logs_dir = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / (
        f"storefront_{datetime.now():%Y%m%d_%H%M%S_%f}.log"
    )

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))

    console_handler = RichHandler(
        console=Console(stderr=True),
        level=resolve_console_level(verbose),
        show_path=False,
        rich_tracebacks=True,
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    _prune_old_logs(logs_dir, Settings.LOG_RETENTION)
    return log_file
