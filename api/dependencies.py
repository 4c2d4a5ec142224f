"""Общие зависимости маршрутов: хранилище, разбор тела запроса и параметров пути."""

from __future__ import annotations

import logging
import re
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from api.responses import STATUS_BAD_INPUT, ApiError
from services.repository import Repository

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def get_repository(request: Request) -> Repository:
    return request.app.state.repository


def bind_json(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """
    Зависимость, которая читает тело запроса как JSON и собирает из него model.
    Невалидный JSON или тело неподходящей формы -> 416 "cant parse json".
    Типы полей проверяются строго (схемы объявлены со strict=True):
    "5", 5.0 и true не считаются целыми.
    """

    async def _bind(request: Request) -> ModelT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            logger.debug("Cannot bind %s from request body: %s", model.__name__, exc)
            raise ApiError(STATUS_BAD_INPUT, "cant parse json") from exc

    return _bind


def json_body_doc(model: type[BaseModel]) -> dict[str, Any]:
    """openapi_extra для маршрутов, которые читают тело через bind_json."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }


def parse_int(raw: str, *, status_code: int, description: str, allow_negative: bool = True) -> int:
    """Целое из сегмента пути: необязательный знак и цифры, в пределах int64."""
    if not _INT_RE.fullmatch(raw):
        raise ApiError(status_code, description)
    value = int(raw)
    if value < _INT64_MIN or value > _INT64_MAX:
        raise ApiError(status_code, description)
    if not allow_negative and value < 0:
        raise ApiError(status_code, description)
    return value
