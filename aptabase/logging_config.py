"""
Logging Configuration Module

Queue-based logging setup for applications and the command line. Library
modules only create named loggers; handlers are attached here on request.
"""

import logging
import logging.handlers
import sys
from queue import Queue
from typing import Optional

# HTTP client loggers that echo every request at INFO/DEBUG
HTTP_LOGGERS = ("httpx", "httpcore")


class _MuteHttpFilter(logging.Filter):
    """Drop request/response lines emitted by the HTTP stack."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        name = record.name or ""
        if name.startswith(HTTP_LOGGERS):
            return False
        msg = record.getMessage()
        if isinstance(msg, str) and msg.startswith(("HTTP Request:", "HTTP Response:")):
            return False
        return True


class QueueLoggingConfig:
    """Logging configuration where handlers run on a listener thread."""

    def __init__(self):
        self._log_listener: Optional[logging.handlers.QueueListener] = None
        self._log_queue: Optional[Queue] = None

    @property
    def is_running(self) -> bool:
        return self._log_listener is not None

    def setup_logging(self, debug: bool = False) -> None:
        """
        Route root logging through a queue to a stdout handler.

        Args:
            debug: Whether to enable debug logging (and HTTP client logs)
        """
        self.stop()

        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)

        self._log_queue = Queue()
        queue_handler = logging.handlers.QueueHandler(self._log_queue)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s")
        )

        self._log_listener = logging.handlers.QueueListener(
            self._log_queue, console_handler, respect_handler_level=True
        )
        self._log_listener.start()

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(queue_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        if not debug:
            self._silence_http_loggers(queue_handler)

    def _silence_http_loggers(self, handler: logging.Handler) -> None:
        """Keep the HTTP stack quiet unless debugging."""
        handler.addFilter(_MuteHttpFilter())

        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    def stop(self) -> None:
        """Stop the logging listener and cleanup."""
        if self._log_listener:
            self._log_listener.stop()
            self._log_listener = None
        self._log_queue = None


# Global logging configuration instance
logging_config = QueueLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    """
    Setup queue-based logging configuration.

    Args:
        debug: Whether to enable debug logging
    """
    logging_config.setup_logging(debug)


def stop_logging() -> None:
    """Stop the logging listener and cleanup."""
    logging_config.stop()
