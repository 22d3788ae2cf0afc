# tests/test_logging_config.py

"""Tests for the storefront logging setup."""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from rich.logging import RichHandler

from src.config.logging_config import (
    ROOT_LOGGER,
    resolve_console_level,
    setup_logging,
)
from src.config.settings import Settings


def _reset_root_logger() -> None:
    root_logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()


class TestConsoleLevel(unittest.TestCase):
    """resolve_console_level precedence."""

    def test_verbose_wins(self) -> None:
        """--verbose forces DEBUG whatever the configured level."""
        with patch.object(Settings, "LOG_LEVEL", "ERROR"):
            self.assertEqual(resolve_console_level(True), logging.DEBUG)

    def test_configured_level(self) -> None:
        """STOREFRONT_LOG_LEVEL sets the console level."""
        with patch.object(Settings, "LOG_LEVEL", "INFO"):
            self.assertEqual(resolve_console_level(), logging.INFO)

    def test_unknown_level_falls_back_to_warning(self) -> None:
        """A typo in the level name does not break start-up."""
        with patch.object(Settings, "LOG_LEVEL", "LOUD"):
            self.assertEqual(resolve_console_level(), logging.WARNING)


class TestSetupLogging(unittest.TestCase):
    """setup_logging against a temporary logs directory."""

    def setUp(self) -> None:
        """Point LOGS_DIR at a fresh temporary directory."""
        self._tmp = tempfile.TemporaryDirectory()
        self.logs_dir = Path(self._tmp.name) / "run-logs"
        patcher = patch.object(Settings, "LOGS_DIR", self.logs_dir)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(_reset_root_logger)

    def _console_handler(self) -> RichHandler:
        handlers = [
            h
            for h in logging.getLogger(ROOT_LOGGER).handlers
            if isinstance(h, RichHandler)
        ]
        self.assertEqual(len(handlers), 1)
        return handlers[0]

    def test_log_file_in_configured_dir(self) -> None:
        """The run log is created under Settings.LOGS_DIR."""
        log_path = setup_logging()
        self.assertEqual(log_path.parent, self.logs_dir)
        self.assertTrue(log_path.exists())
        self.assertRegex(
            log_path.name, r"^storefront_\d{8}_\d{6}_\d{6}\.log$"
        )

    def test_console_uses_configured_level(self) -> None:
        """Without --verbose the console follows LOG_LEVEL."""
        with patch.object(Settings, "LOG_LEVEL", "ERROR"):
            setup_logging()
        self.assertEqual(self._console_handler().level, logging.ERROR)

    def test_verbose_lowers_console_level(self) -> None:
        """--verbose shows DEBUG records on the console."""
        setup_logging(verbose=True)
        self.assertEqual(self._console_handler().level, logging.DEBUG)

    def test_second_call_replaces_handlers(self) -> None:
        """Re-running setup swaps handlers instead of stacking them."""
        setup_logging()
        setup_logging(verbose=True)
        self.assertEqual(len(logging.getLogger(ROOT_LOGGER).handlers), 2)
        self.assertEqual(self._console_handler().level, logging.DEBUG)

    def test_file_captures_module_debug_records(self) -> None:
        """DEBUG records from module loggers reach the run file."""
        with patch.object(Settings, "LOG_LEVEL", "CRITICAL"):
            log_path = setup_logging()
        logging.getLogger("storefront.repository").debug("fetched %d", 20)
        for handler in logging.getLogger(ROOT_LOGGER).handlers:
            handler.flush()
        self.assertIn("fetched 20", log_path.read_text(encoding="utf-8"))

    def test_old_run_logs_pruned(self) -> None:
        """Only the newest LOG_RETENTION run logs are kept."""
        self.logs_dir.mkdir(parents=True)
        for n in range(8):
            (self.logs_dir / f"storefront_20000101_000000_{n:06d}.log").touch()
        (self.logs_dir / "notes.txt").touch()

        with patch.object(Settings, "LOG_RETENTION", 3):
            log_path = setup_logging()

        runs = sorted(self.logs_dir.glob("storefront_*.log"))
        self.assertEqual(len(runs), 3)
        self.assertIn(log_path, runs)
        self.assertTrue((self.logs_dir / "notes.txt").exists())


if __name__ == "__main__":
    unittest.main()
