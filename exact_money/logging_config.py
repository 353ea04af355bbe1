"""
Logging Module

Package loggers live under "exact_money". Records may carry the structured
fields below, which the JSON formatter lifts into the output object.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional

from .config import get_config

PACKAGE_LOGGER = "exact_money"
STRUCTURED_FIELDS = ("action", "resource", "extra")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", logger_name: str = PACKAGE_LOGGER,
                  log_format: str = "json") -> logging.Logger:
    """
    Attach a single stderr handler to a package logger.

    Calling it again replaces the handler rather than adding another one.
    log_format is "json" or "text".
    """
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if log_format == "json" else logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger


def setup_logging_from_config() -> logging.Logger:
    """setup_logging() with the EXACT_MONEY_LOG_* settings"""
    settings = get_config()
    return setup_logging(settings.log_level, log_format=settings.log_format)


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               extra: Optional[dict] = None):
    """Log message with the given structured fields; unset fields are left off"""
    fields = {"action": action, "resource": resource, "extra": extra}
    logger.log(logging.getLevelName(level.upper()),
               message, extra={k: v for k, v in fields.items() if v})
