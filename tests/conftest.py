import pytest
from loguru import logger


class CountingProducer:
    """Iterator over fixed values that counts how many it has handed out."""

    def __init__(self, values):
        self._values = iter(values)
        self.pulled = 0

    def __iter__(self):
        return self

    def __next__(self):
        value = next(self._values)
        self.pulled += 1
        return value


@pytest.fixture
def counting():
    return CountingProducer


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def restore_logging():
    """Drop the stderr handler installed by configure_logging after a test."""
    from zipstrict.core import config

    yield
    if config._handler_id is not None:
        try:
            logger.remove(config._handler_id)
        except ValueError:
            pass
        config._handler_id = None
