"""Shared pytest configuration."""

import sys
from pathlib import Path

import pytest
from loguru import logger

sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep expected ERROR logs from failure tests out of the output."""
    logger.remove()
    handler_id = logger.add(sys.stderr, level="CRITICAL")
    yield
    try:
        logger.remove(handler_id)
    except ValueError:
        pass
