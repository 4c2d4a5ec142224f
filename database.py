"""
Конфигурация SQLAlchemy.
Движок и фабрика сессий создаются явно и передаются в репозиторий,
глобального подключения к базе нет.
Таблицы создаются через Base.metadata.create_all.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker


Base = declarative_base()


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    engine = create_engine(database_url, future=True, echo=echo)

    if engine.dialect.name == "sqlite":
        # В SQLite внешние ключи выключены по умолчанию и включаются на каждое соединение.
        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:  # noqa: WPS430
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    import models  # noqa: F401, WPS433  регистрирует таблицы в Base.metadata

    Base.metadata.create_all(bind=engine)
