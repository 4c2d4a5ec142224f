"""Ответы API: JSON с отступами и конверт {"Status", "Description"} для ошибок."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.envelope import AnswerJSON

logger = logging.getLogger(__name__)

# Коды ответов, которые ждут существующие клиенты
STATUS_BAD_INPUT = 416
STATUS_UNKNOWN_LOGIN = 403
STATUS_SERVER_ERROR = 500


class IndentedJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=4,
        ).encode("utf-8")


class ApiError(Exception):
    """Прерывает обработку запроса и отдаёт конверт со статусом "error"."""

    def __init__(self, status_code: int, description: str) -> None:
        self.status_code = status_code
        self.description = description
        super().__init__(f"{status_code}: {description}")


def envelope(status_code: int, answer: AnswerJSON) -> IndentedJSONResponse:
    return IndentedJSONResponse(status_code=status_code, content=answer.to_wire())


async def api_error_handler(request: Request, exc: ApiError) -> IndentedJSONResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.description)
    else:
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.description)
    return envelope(exc.status_code, AnswerJSON.fail(exc.description))


async def unhandled_error_handler(request: Request, exc: Exception) -> IndentedJSONResponse:  # noqa: WPS430
    logger.exception("Unhandled application error", exc_info=exc)
    return envelope(STATUS_SERVER_ERROR, AnswerJSON.fail("Internal Server Error"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
