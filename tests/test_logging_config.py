"""
Tests for the queue-based logging setup.
"""

import logging

import pytest

from aptabase.logging_config import HTTP_LOGGERS, QueueLoggingConfig, _MuteHttpFilter


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    http_levels = {name: logging.getLogger(name).level for name in HTTP_LOGGERS}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, http_level in http_levels.items():
        logging.getLogger(name).setLevel(http_level)


def _record(name, msg):
    return logging.LogRecord(name, logging.INFO, __file__, 1, msg, None, None)


class TestMuteHttpFilter:
    def test_drops_http_client_records(self):
        mute = _MuteHttpFilter()
        assert not mute.filter(_record("httpx", "anything"))
        assert not mute.filter(_record("httpcore.connection", "connect_tcp.started"))
        assert not mute.filter(_record("other", "HTTP Request: POST https://us.aptabase.com"))

    def test_keeps_other_records(self):
        assert _MuteHttpFilter().filter(_record("aptabase.event_tracker", 'Failed to send event "x"'))


class TestQueueLoggingConfig:
    def test_setup_and_stop(self, restore_root_logger):
        config = QueueLoggingConfig()
        config.setup_logging(debug=False)
        try:
            root = logging.getLogger()
            assert config.is_running
            assert len(root.handlers) == 1
            assert root.level == logging.INFO
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            config.stop()

        assert not config.is_running

    def test_debug_level(self, restore_root_logger):
        config = QueueLoggingConfig()
        config.setup_logging(debug=True)
        try:
            assert logging.getLogger().level == logging.DEBUG
            assert not logging.getLogger().handlers[0].filters
        finally:
            config.stop()

    def test_setup_twice_replaces_listener(self, restore_root_logger):
        config = QueueLoggingConfig()
        config.setup_logging()
        config.setup_logging()
        try:
            assert len(logging.getLogger().handlers) == 1
        finally:
            config.stop()

    def test_debug_after_quiet_setup_restores_http_loggers(self, restore_root_logger):
        """Switching to debug lets HTTP client records through again."""
        config = QueueLoggingConfig()
        config.setup_logging(debug=False)
        config.setup_logging(debug=True)
        try:
            for name in HTTP_LOGGERS:
                assert logging.getLogger(name).level == logging.NOTSET
                assert logging.getLogger(name).isEnabledFor(logging.DEBUG)
        finally:
            config.stop()
