"""Fixtures for end-to-end CLI tests."""

import pytest
from click.testing import CliRunner

from persistkit.entrypoints.cli.main import persistkit

# pylint: disable=redefined-outer-name


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    """Invoke ``persistkit`` with the flight recorder pointed at the temp dir."""
    def _invoke(*args: str):
        return runner.invoke(
            persistkit,
            ["--log-path", str(tmp_path / "flight.log"), *args],
            catch_exceptions=False,
        )

    return _invoke
