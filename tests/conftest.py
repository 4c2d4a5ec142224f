"""Общие фикстуры: приложение на хранилище в памяти, SQLite-хранилище и вызов ASGI без HTTP-клиента."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
import sys
from typing import Any

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from api.main import create_app
from config import Settings
from database import build_engine, build_session_factory, init_db
from schemas.basket import Basket
from schemas.goods import Goods
from schemas.users import Users
from services.memory_repository import MemoryRepository
from services.sql_repository import SqlRepository


_NO_BODY = object()


@dataclass
class AppResponse:
    status: int
    headers: dict[str, str]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.body)


async def _call_app(app, method: str, path: str, body: bytes | None, *, raise_app_exceptions: bool) -> AppResponse:
    response_body = bytearray()
    status: int | None = None
    headers: list[tuple[bytes, bytes]] = []
    body_sent = False

    async def receive() -> dict[str, object]:
        nonlocal body_sent
        if body_sent:
            return {"type": "http.disconnect"}
        body_sent = True
        return {"type": "http.request", "body": body or b"", "more_body": False}

    async def send(message: dict[str, object]) -> None:
        nonlocal status, headers, response_body
        if message["type"] == "http.response.start":
            status = int(message["status"])
            headers = list(message.get("headers", []))
        elif message["type"] == "http.response.body":
            response_body += message.get("body", b"")

    request_headers = [(b"host", b"testserver")]
    if body is not None:
        request_headers.append((b"content-type", b"application/json"))
        request_headers.append((b"content-length", str(len(body)).encode()))

    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": request_headers,
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
        "scheme": "http",
    }

    try:
        await app(scope, receive, send)
    except Exception:
        # Starlette пробрасывает исключение дальше после того, как отдал 500
        if raise_app_exceptions or status is None:
            raise
    return AppResponse(
        status=status or 500,
        headers={k.decode(): v.decode() for k, v in headers},
        body=bytes(response_body),
    )


def call(
    app,
    method: str,
    path: str,
    json_body: Any = _NO_BODY,
    *,
    raw_body: bytes | None = None,
    raise_app_exceptions: bool = True,
) -> AppResponse:
    body = raw_body
    if json_body is not _NO_BODY:
        body = json.dumps(json_body).encode("utf-8")
    return asyncio.run(_call_app(app, method, path, body, raise_app_exceptions=raise_app_exceptions))


@pytest.fixture()
def settings() -> Settings:
    return Settings(database_url="sqlite+pysqlite:///:memory:", log_level="WARNING")


@pytest.fixture()
def repo() -> MemoryRepository:
    repo = MemoryRepository()

    repo.create_product(Goods(name="Кофе", description="1 кг", price=Decimal("1290"), quantity=12, floor=1))
    repo.create_product(Goods(name="Чайник", description="1.7 л", price=Decimal("2490"), quantity=4, floor=2))
    repo.create_product(Goods(name="Кружка", description="350 мл", price=Decimal("390"), quantity=40, floor=2))

    repo.create_user(Users(login="ann", name="Ann"))
    repo.create_user(Users(login="bob", name="Bob"))

    repo.create_basket_row(Basket(user_id=1, good_id=1, quantity=1))
    repo.create_basket_row(Basket(user_id=1, good_id=3, quantity=2))

    # Заполнение фикстуры не считается обращением обработчиков к хранилищу
    repo.calls.clear()
    return repo


@pytest.fixture()
def app(repo: MemoryRepository, settings: Settings):
    return create_app(repository=repo, settings=settings)


@pytest.fixture()
def sql_repo(tmp_path: Path):
    engine = build_engine(f"sqlite+pysqlite:///{tmp_path / 'goods.sqlite3'}")
    init_db(engine)
    try:
        yield SqlRepository(build_session_factory(engine))
    finally:
        engine.dispose()
