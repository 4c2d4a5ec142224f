"""
Сборка FastAPI-приложения.

Хранилище передаётся в create_app явно и лежит в app.state.repository;
если его не передали, создаётся SqlRepository по настройкам из окружения.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.responses import IndentedJSONResponse, register_error_handlers
from api.routers import basket, goods, ping
from config import Settings, get_settings
from database import build_engine, build_session_factory, init_db
from services.repository import Repository
from services.sql_repository import SqlRepository
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _build_sql_repository(app: FastAPI, settings: Settings) -> SqlRepository:
    engine = build_engine(settings.database_url, echo=settings.sqlalchemy_echo)
    app.state.engine = engine

    if settings.create_tables_on_startup:

        @app.on_event("startup")
        def _create_tables() -> None:
            init_db(engine)
            logger.info("Database tables are ready")

    @app.on_event("shutdown")
    def _dispose_engine() -> None:
        engine.dispose()

    return SqlRepository(build_session_factory(engine))


def create_app(repository: Repository | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, log_file=settings.log_file)

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        default_response_class=IndentedJSONResponse,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    if repository is None:
        repository = _build_sql_repository(app, settings)
    app.state.repository = repository
    app.state.settings = settings

    app.include_router(ping.router)
    app.include_router(goods.router)
    app.include_router(basket.router)

    @app.get("/", tags=["Tests"])
    def healthcheck() -> dict[str, bool]:
        return {"ok": True}

    return app


__all__ = ["create_app"]
