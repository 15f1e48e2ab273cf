"""Root conftest for all tests."""

import pytest

from strava_auth.core.logger import setup_logger


@pytest.fixture(autouse=True)
def restore_logger():
    """Rebind loguru to the current stderr after each test.

    The CLI and logger tests replace the sinks; later tests must not log into a
    closed CliRunner stream or a removed temp file.
    """
    yield
    setup_logger(level="INFO")
