"""Pytest configuration and shared fixtures for the textify test suite."""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from textify.logging_utils import PACKAGE_LOGGER
from textify.options import TextifyOptions
from textify.renderer import RenderContext

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def options() -> TextifyOptions:
    """Default rendering options."""
    return TextifyOptions()


@pytest.fixture
def context(options: TextifyOptions) -> RenderContext:
    """Fresh render context with default options."""
    return RenderContext(options)


@pytest.fixture
def table_html() -> str:
    """Two-by-two table with uneven cell widths."""
    return "<table><tr><td>a</td><td>bb</td></tr><tr><td>ccc</td><td>d</td></tr></table>"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging after each test."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
