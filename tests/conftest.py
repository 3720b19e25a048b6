"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest
from click.testing import CliRunner

from wireglyph.config import EngineConfig, build_engine
from wireglyph.logging_config import LOGGER_NAME


@pytest.fixture()
def square_engine():
    """Return (config, shape, buffer) for the 41-cell square preset."""
    config = EngineConfig.from_preset("square")
    return (config, *build_engine(config))


@pytest.fixture()
def tesseract_engine():
    """Return (config, shape, buffer) for the 60-cell tesseract preset."""
    config = EngineConfig.from_preset("tesseract")
    return (config, *build_engine(config))


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Return a Click CliRunner for invoking CLI commands."""
    return CliRunner()


@pytest.fixture()
def invoke(cli_runner: CliRunner):
    """Return a helper that invokes CLI commands.

    Usage::

        result = invoke("show", "--preset", "square")
    """
    from wireglyph.cli import cli

    def _invoke(*args: str, **kwargs):
        return cli_runner.invoke(cli, list(args), **kwargs)

    return _invoke


@pytest.fixture(autouse=True)
def _reset_logging():
    """Close handlers the CLI attached so later tests do not write to dead streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
