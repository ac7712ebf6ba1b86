"""Logging helpers for podbind.

The package logger carries a NullHandler, so importing podbind never prints
anything. Applications that want podbind's records on stdout call
setup_logging(), which only touches the ``podbind`` logger tree:

    setup_logging(get_config().logging)

JSON output keeps the ``event`` extra attached by the operations, e.g.
{"timestamp": ..., "level": "INFO", "logger": "podbind.secrets",
 "service": "podbind", "message": "Created secret: db-pass",
 "event": "secret_created", "secret_id": "abc123"}
"""

import logging
import sys

from pythonjsonlogger import json as jsonlogger

from podbind.config import LoggingConfig

PACKAGE_LOGGER = "podbind"

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_JSON_FORMAT = "%(levelname)s %(name)s %(message)s"


class _PodbindHandler(logging.StreamHandler):
    """Stream handler installed by setup_logging(); replaced on reconfigure."""


def json_formatter(config: LoggingConfig) -> jsonlogger.JsonFormatter:
    """Build the JSON formatter used for log aggregation."""
    return jsonlogger.JsonFormatter(
        _JSON_FORMAT,
        rename_fields={"levelname": "level", "name": "logger"},
        static_fields={"service": config.service_name},
        timestamp=True,
    )


def setup_logging(config: LoggingConfig, stream=None) -> logging.Logger:
    """Send podbind's records to ``stream`` (stdout by default).

    Root logger handlers and levels are left alone. Calling this again
    replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, _PodbindHandler):
            logger.removeHandler(handler)
            handler.close()

    handler = _PodbindHandler(stream or sys.stdout)
    if config.format == "json":
        handler.setFormatter(json_formatter(config))
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    # Records are already written here; avoid duplicates through root handlers.
    logger.propagate = False
    return logger
