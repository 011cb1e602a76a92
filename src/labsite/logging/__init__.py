import logging
import logging.config
import os
import sys

from .config import load_stock_config
from .formatters import LabsiteJsonFormatter

WATCHTOWER_IMPORTED = False
try:
    from watchtower import CloudWatchLogHandler

    WATCHTOWER_IMPORTED = True
except ModuleNotFoundError:
    pass

LOG_CONFIG = os.environ.get("LOG_CONFIG")


def canonical_only(record: logging.LogRecord) -> bool:
    return record.__dict__.get("canonical", False)


def configure():
    """
    Configures logging for the Labsite API.

    The stock configuration named by ``LOG_CONFIG`` (``default`` when unset) is loaded from
    ``labsite/logging/configurations``. Library warnings are captured at ``WARNING`` and uncaught
    exceptions are logged at ``CRITICAL`` before the process exits.

    CloudWatch handlers, when the optional ``watchtower`` package is installed and the chosen
    configuration declares one, only receive canonical request lines, formatted as JSON.
    """
    logging.config.dictConfig(load_stock_config(LOG_CONFIG if LOG_CONFIG else "default"))
    logging.captureWarnings(True)

    sys.excepthook = lambda *args: logging.getLogger().critical("Uncaught exception:", exc_info=args)  # type: ignore

    root_logger = logging.getLogger()
    cloud_watch_enabled = False

    if WATCHTOWER_IMPORTED:
        for handler in root_logger.handlers:
            if isinstance(handler, CloudWatchLogHandler):
                handler.addFilter(canonical_only)
                handler.formatter = LabsiteJsonFormatter()
                cloud_watch_enabled = True

    if not cloud_watch_enabled:
        root_logger.info("CloudWatch log handler is not enabled. Canonical logs will only be emitted to stdout.")
