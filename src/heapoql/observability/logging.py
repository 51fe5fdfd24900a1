from __future__ import annotations

import logging
from typing import Optional

from heapoql.config import log_level_or_default

_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger under the "heapoql" namespace with one stderr handler.
    The level comes from HEAPOQL_LOG_LEVEL; an unknown value means WARNING,
    so importing a module that logs never fails on configuration.
    """
    if name and name != "heapoql" and not name.startswith("heapoql."):
        name = f"heapoql.{name}"
    logger = logging.getLogger(name or "heapoql")
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(log_level_or_default())
    # a handler on a parent "heapoql" logger would print each record twice
    logger.propagate = False
    return logger
