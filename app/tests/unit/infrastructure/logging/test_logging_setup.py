"""Unit tests for infrastructure.logging.setup."""

import pytest
import structlog

from infrastructure.logging import configure_logging, get_module_logger


@pytest.mark.unit
class TestConfigureLogging:
    def test_returns_logger_under_pytest(self):
        logger = configure_logging()
        assert logger is not None
        assert structlog.is_configured()

    def test_module_logger_binds_component(self):
        logger = get_module_logger()
        context = structlog.get_context(logger)
        assert context["component"] == "test_logging_setup"
        assert context["module_path"].endswith("test_logging_setup")
