import io
import logging

import pytest

from finance_engine import logging_setup
from finance_engine.config import LOG_LEVEL_ENV


@pytest.fixture
def fresh_logger():
    pkg_logger = logging.getLogger('finance_engine')
    handlers, level, propagate = list(pkg_logger.handlers), pkg_logger.level, pkg_logger.propagate
    yield pkg_logger
    pkg_logger.handlers = handlers
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


def test_get_logger_is_silent_until_configured(fresh_logger):
    fresh_logger.handlers = []
    logging_setup.get_logger('finance_engine.metrics')
    assert any(isinstance(h, logging.NullHandler) for h in fresh_logger.handlers)


def test_configure_logging_replaces_handlers(fresh_logger):
    stream = io.StringIO()
    logging_setup.configure_logging('ERROR', stream=io.StringIO())
    logging_setup.configure_logging('debug', stream=stream)

    logging_setup.get_logger('finance_engine.categories').debug('folded %d', 3)

    assert len(fresh_logger.handlers) == 1
    assert stream.getvalue().strip().endswith('finance_engine.categories DEBUG folded 3')
    assert not fresh_logger.propagate


def test_configure_logging_reads_level_from_environment(fresh_logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, 'WARNING')
    logging_setup.configure_logging(stream=io.StringIO())
    assert fresh_logger.level == logging.WARNING
