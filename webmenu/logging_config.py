"""Logging setup for applications embedding :mod:`webmenu`."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_LOGGER_NAME = "webmenu"
_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_HANDLER_MARKER = "_webmenu_handler"


def configure_logging(
    level: int = logging.INFO,
    stream: Optional[logging.Handler] = None,
    propagate: bool = False,
) -> logging.Logger:
    """Attach one formatted handler to the ``webmenu`` logger and return it.

    The library never calls this itself; menus emit DEBUG events through the
    ``webmenu.*`` loggers and stay silent until the host opts in. Only the
    ``webmenu`` logger is touched: handlers the host installed on the root
    logger are left alone.

    Parameters
    ----------
    level:
        The level applied to the ``webmenu`` logger.
    stream:
        Optional handler. When omitted a handler pointing to ``sys.stdout``
        is used.
    propagate:
        Whether records should also reach the root logger's handlers.
    """

    logger = logging.getLogger(_LOGGER_NAME)
    if stream is None:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
    else:
        handler = stream

    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)

    # Repeated calls replace our own handler, never the host's.
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)

    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = propagate
    return logger


__all__ = ["configure_logging"]
