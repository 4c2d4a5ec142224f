"""
Создание таблиц и начальное заполнение базы.
Вызывается вручную или при dev-запуске:

    python initdb.py --seed
"""

from __future__ import annotations

import argparse
import logging
from decimal import Decimal
from typing import Sequence

from config import get_settings
from database import build_engine, build_session_factory, init_db
from schemas.basket import Basket
from schemas.goods import Goods
from schemas.users import Users
from services.repository import Repository
from services.sql_repository import SqlRepository
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

DEMO_GOODS = [
    Goods(name="Кофе в зёрнах", description="Арабика, 1 кг", price=Decimal("1290.00"), quantity=12, floor=1),
    Goods(name="Чайник", description="Электрический, 1.7 л", price=Decimal("2490.00"), quantity=4, floor=2),
    Goods(name="Кружка", description="Керамика, 350 мл", price=Decimal("390.00"), quantity=40, floor=2),
]
DEMO_USERS = [
    Users(login="ann", name="Ann"),
    Users(login="bob", name="Bob"),
]


def seed_demo_data(repo: Repository) -> None:
    """Заполняет пустую базу демонстрационными товарами, пользователями и корзиной."""
    if repo.list_goods():
        logger.info("Goods table is not empty, seeding skipped")
        return

    goods = [repo.create_product(item) for item in DEMO_GOODS]
    users = [repo.create_user(user) for user in DEMO_USERS]
    repo.create_basket_row(Basket(user_id=users[0].id, good_id=goods[0].id, quantity=1))
    repo.create_basket_row(Basket(user_id=users[0].id, good_id=goods[2].id, quantity=2))
    logger.info("Seeded %s goods and %s users", len(goods), len(users))


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Создание таблиц goods / basket / users")
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL; по умолчанию DATABASE_URL из окружения",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Добавить демонстрационные товары, пользователей и корзину в пустую базу",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, log_file=settings.log_file)

    engine = build_engine(args.database_url or settings.database_url, echo=settings.sqlalchemy_echo)
    try:
        init_db(engine)
        logger.info("Tables created")
        if args.seed:
            seed_demo_data(SqlRepository(build_session_factory(engine)))
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
