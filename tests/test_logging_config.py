# tests/test_logging_config.py

import logging

import pytest

from common.config import Settings
from common.logging_config import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    noisy = {name: logging.getLogger(name).level for name in ("httpx", "httpcore", "asyncio")}
    yield
    logging.disable(logging.NOTSET)
    for name, level in noisy.items():
        logging.getLogger(name).setLevel(level)


def test_transport_loggers_are_quieted():
    configure_logging(Settings(_env_file=None, log_level="DEBUG"))

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_mute_all_logs_disables_logging():
    configure_logging(Settings(_env_file=None, mute_all_logs=True))

    assert logging.root.manager.disable == logging.CRITICAL
    assert not logging.getLogger("infrastructure.backoff").isEnabledFor(logging.ERROR)
