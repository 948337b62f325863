# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-12
# Updated: 2026-10-17
# Description: logging_utils.py
# -----------------------------------------------------------------------------
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog

BASE_LOGGER_NAME = "script_rag"

_TRUTHY = ("1", "true", "yes", "y", "on")

_LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

_MESSAGE_COLORS = {
    "message": {
        "INFO": "white",
        "WARNING": "yellow",
        "ERROR": "light_red",
        "CRITICAL": "red",
    }
}


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _console_handler() -> logging.Handler:
    # SCRIPT_LOG_COLOR=auto colours only when attached to a terminal
    color_mode = os.getenv("SCRIPT_LOG_COLOR", "auto").strip().lower()
    use_color = sys.stderr.isatty() if color_mode == "auto" else color_mode in _TRUTHY

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=(
                "%(log_color)s%(asctime)s [%(levelname)s] "
                "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
            ),
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors=_LOG_COLORS,
            secondary_log_colors=_MESSAGE_COLORS,
            no_color=not use_color,
            style="%",
        )
    )
    return handler


def _file_handler() -> logging.Handler:
    log_path = Path(os.getenv("SCRIPT_LOG_FILE", "./logs/script_rag.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=int(os.getenv("SCRIPT_LOG_MAX_BYTES", str(5 * 1024 * 1024))),  # 5MB
        backupCount=int(os.getenv("SCRIPT_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def _create_logger(full_name: str) -> logging.Logger:
    """
    Configure a named logger once. Later calls with the same name return
    the already configured instance.
    """
    logger = logging.getLogger(full_name)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    if _flag("SCRIPT_LOG_TO_FILE", "0"):
        logger.addHandler(_file_handler())

    level_name = os.getenv("SCRIPT_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for module-level code, e.g. script_rag.api"""
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _create_logger(full_name)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Returns a logger whose name includes module + class, e.g.:

      script_rag.services.ScriptSearchService.ScriptSearchService
      script_rag.vectorstore.EmbeddingRecordStore.EmbeddingRecordStore
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return _create_logger(f"{BASE_LOGGER_NAME}.{module}.{classname}")
