"""Logging configuration for Workly backend.

All backend loggers live under the ``workly`` namespace so a single
handler configured here covers routes, auth and database helpers.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER = "workly"

_configured = False


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the ``workly`` logger once and return it."""
    global _configured
    logger = logging.getLogger(ROOT_LOGGER)
    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True
    logger.setLevel(level.upper())
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger, namespaced under ``workly`` if it isn't already."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def log_order_transition(
    logger: logging.Logger,
    action: str,
    order_id: str,
    status: str | None = None,
    error: str | None = None,
) -> None:
    """Log an order lifecycle action in a consistent one-line format."""
    if error:
        logger.warning(f"Order {action} failed | id={order_id} | error={error}")
    else:
        logger.info(f"Order {action} | id={order_id} | status={status}")
