"""Package logger.

One ``qnrollstat`` logger, configured lazily. Applications embedding the
package can replace its handlers or level; by default it stays at WARNING so
the DEBUG traces of the selection engine are silent.
"""
import logging
from typing import Optional

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger("qnrollstat")
        # Only add a handler if the application hasn't configured logging.
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
            logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        _LOGGER = logger
    return _LOGGER


__all__ = ["get_logger"]
