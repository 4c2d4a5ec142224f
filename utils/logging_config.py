"""
Логирование API и служебных скриптов.

setup_logging можно вызывать повторно (например, из create_app в каждом тесте):
обработчики, поставленные здесь, заменяются, чужие обработчики корня не трогаются.
Логгеры uvicorn пишут через корень, поэтому файл лога один на весь процесс.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_MAX_BYTES = 5_000_000
LOG_BACKUPS = 3

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Метка на обработчиках, которыми управляет этот модуль
_OWNED_ATTR = "_goods_api_handler"


def _owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED_ATTR, True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _drop_owned_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _OWNED_ATTR, False):
            logger.removeHandler(handler)
            handler.close()


def setup_logging(level: int | str = logging.INFO, *, log_file: Path | str | None = None) -> None:
    numeric_level = _resolve_level(level)
    root = logging.getLogger()
    _drop_owned_handlers(root)

    root.addHandler(_owned(logging.StreamHandler()))
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        root.addHandler(
            _owned(RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"))
        )
    root.setLevel(numeric_level)

    for logger_name in UVICORN_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(numeric_level)
        logger.propagate = True
