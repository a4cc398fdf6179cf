"""Root pytest configuration for all tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_src_logger():
    """Drop handlers the CLI attaches to the 'src' logger between tests."""
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
