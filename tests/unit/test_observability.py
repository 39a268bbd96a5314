"""Unit tests for structured logging setup."""

import importlib
from collections.abc import Iterator

import pytest
import structlog

from uncertainty_ks.observability import configure_logging, get_logger


class TestObservability:
    """Tests for configure_logging() and get_logger()."""

    @pytest.fixture(autouse=True)
    def restore_structlog_defaults(self) -> Iterator[None]:
        """Undo any configure_logging() call made by a test."""
        yield
        structlog.reset_defaults()

    def test_unknown_level_raises(self) -> None:
        """An unrecognised level name must raise ValueError."""
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("CHATTY")

    def test_logger_carries_module_name(self) -> None:
        """Events include the module name given to get_logger()."""
        configure_logging("DEBUG")
        with structlog.testing.capture_logs() as captured:
            get_logger("uncertainty_ks.sample").info("Sample ingested", size=3)
        assert captured == [
            {
                "logger_name": "uncertainty_ks.sample",
                "size": 3,
                "event": "Sample ingested",
                "log_level": "info",
            }
        ]

    def test_logger_created_before_configuration_follows_it(self) -> None:
        """A module-level logger picks up a later configure_logging() call."""
        logger = get_logger("uncertainty_ks.early")
        configure_logging("WARNING")
        with structlog.testing.capture_logs() as captured:
            logger.info("Dropped below WARNING")
            logger.warning("Late configuration applied")
        assert captured == [
            {
                "logger_name": "uncertainty_ks.early",
                "event": "Late configuration applied",
                "log_level": "warning",
            }
        ]

    @pytest.mark.parametrize(
        "module",
        [
            "uncertainty_ks.adapters.statistical_tests.xenocryst_filter",
            "uncertainty_ks.adapters.statistical_tests.uncertainty_ks",
            "uncertainty_ks.core.services",
            "uncertainty_ks.api.router",
            "uncertainty_ks.main",
        ],
    )
    def test_modules_with_module_level_loggers_import(self, module: str) -> None:
        """Modules that create a logger at import time load cleanly."""
        assert importlib.import_module(module).logger is not None
