import logging

import pytest
import structlog

from oplimiter.config import load_settings


@pytest.fixture(autouse=True)
def _reset_logging_and_settings():
    yield
    structlog.reset_defaults()
    load_settings.cache_clear()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
