"""
Logging setup for the API process.

``setup_logging`` attaches the idea board handlers (console, plus a
file when ``LOG_FILE`` is set) to the root logger and hands uvicorn's
own loggers over to them, so server start‑up, access lines and
application messages share one format and one destination.  ``run.py``
starts uvicorn with ``log_config=None`` so uvicorn does not install
its handlers on top.
"""

import logging
from typing import List

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers created by uvicorn; they log through root once their handlers go.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_HANDLER_FLAG = "idea_board_handler"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(config: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
    return handlers


def setup_logging(config: Settings) -> int:
    """Configure logging from ``config.log_level`` and ``config.log_file``.

    Handlers are added once per process; later calls (one per
    ``create_app``) only update levels.  Returns the numeric level in
    effect.
    """
    level = _resolve_level(config.log_level)
    root = logging.getLogger()
    if not any(getattr(handler, _HANDLER_FLAG, False) for handler in root.handlers):
        for handler in _build_handlers(config):
            root.addHandler(handler)
    root.setLevel(level)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(level)
    return level
