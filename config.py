from dataclasses import dataclass, field
import os

from dotenv import load_dotenv

# Загружаем .env один раз при импорте модуля
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _default_database_url() -> str:
    db_name = os.getenv("DB_NAME", "goods")
    db_user = os.getenv("DB_USER", "goods_user")
    db_password = os.getenv("DB_PASSWORD", "strongpassword")
    db_host = os.getenv("DB_HOST", "localhost")
    db_port = os.getenv("DB_PORT", "5432")
    return f"postgresql+psycopg2://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _load_cors_origins() -> list[str]:
    """
    Считывает CORS_ORIGINS=https://a.example,https://b.example.
    Пустое значение означает "*".
    """
    raw = os.getenv("CORS_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    origins = [part.strip() for part in raw.split(",") if part.strip()]
    return origins or ["*"]


@dataclass
class Settings:
    database_url: str
    sqlalchemy_echo: bool = False
    log_level: str = "INFO"
    log_file: str | None = None
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    # Создавать таблицы при старте приложения (Base.metadata.create_all)
    create_tables_on_startup: bool = True
    app_title: str = "Goods API"
    app_version: str = "1.0.0"


def get_settings() -> Settings:
    """
    Возвращает объект настроек, собранный из переменных окружения.
    DATABASE_URL имеет приоритет над DB_NAME / DB_USER / DB_PASSWORD / DB_HOST / DB_PORT.
    """
    database_url = os.getenv("DATABASE_URL", "").strip() or _default_database_url()

    return Settings(
        database_url=database_url,
        sqlalchemy_echo=os.getenv("SQLALCHEMY_ECHO") == "1",
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        log_file=os.getenv("LOG_FILE") or None,
        api_host=os.getenv("API_HOST", "0.0.0.0").strip() or "0.0.0.0",
        api_port=_env_int("API_PORT", 8080),
        cors_origins=_load_cors_origins(),
        create_tables_on_startup=_env_flag("CREATE_TABLES_ON_STARTUP", True),
    )
