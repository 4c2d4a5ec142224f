from __future__ import annotations

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from database import session_scope
from models import BasketRow, Goods as GoodsRow, User
from schemas.basket import Basket
from schemas.goods import Goods
from schemas.users import Users
from services.errors import RecordNotFound, RepositoryError
from services.repository import Repository

logger = logging.getLogger(__name__)


def _goods_to_schema(row: GoodsRow) -> Goods:
    return Goods(
        id=int(row.id),
        name=row.name or "",
        description=row.description or "",
        price=Decimal(row.price if row.price is not None else 0),
        quantity=int(row.quantity or 0),
        floor=int(row.floor or 0),
    )


def _basket_to_schema(row: BasketRow) -> Basket:
    return Basket(
        id=int(row.id),
        user_id=int(row.user_id),
        good_id=int(row.good_id),
        quantity=int(row.quantity or 0),
    )


def _user_to_schema(row: User) -> Users:
    return Users(id=int(row.id), login=row.login, name=row.name or "")


class SqlRepository(Repository):
    """Хранилище поверх SQLAlchemy. Каждая операция открывает свою сессию."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.warning("Database error: %s", exc)
            raise RepositoryError(str(exc)) from exc

    # --- goods ---

    def list_goods(self) -> list[Goods]:
        with self._session() as session:
            rows = session.scalars(select(GoodsRow).order_by(GoodsRow.id)).all()
            return [_goods_to_schema(row) for row in rows]

    def get_objects_by_floor(self, floor: int) -> list[Goods]:
        with self._session() as session:
            rows = session.scalars(
                select(GoodsRow).where(GoodsRow.floor == floor).order_by(GoodsRow.id)
            ).all()
            return [_goods_to_schema(row) for row in rows]

    def get_product_by_id(self, product_id: int) -> Goods:
        with self._session() as session:
            row = session.get(GoodsRow, product_id)
            if row is None:
                raise RecordNotFound("goods", product_id)
            return _goods_to_schema(row)

    def change_product(self, product_id: int, price: Decimal) -> None:
        with self._session() as session:
            row = session.get(GoodsRow, product_id)
            if row is None:
                raise RecordNotFound("goods", product_id)
            row.price = price
        logger.debug("Price of goods %s changed to %s", product_id, price)

    def create_product(self, goods: Goods) -> Goods:
        with self._session() as session:
            row = GoodsRow(
                id=goods.id or None,
                name=goods.name,
                description=goods.description,
                price=goods.price,
                quantity=goods.quantity,
                floor=goods.floor,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            created = _goods_to_schema(row)
        logger.debug("Goods %s created", created.id)
        return created

    def delete_product(self, product_id: int) -> None:
        with self._session() as session:
            row = session.get(GoodsRow, product_id)
            if row is None:
                raise RecordNotFound("goods", product_id)
            session.delete(row)
        logger.debug("Goods %s deleted", product_id)

    # --- basket ---

    def create_basket_row(self, row: Basket) -> Basket:
        with self._session() as session:
            record = BasketRow(
                id=row.id or None,
                user_id=row.user_id,
                good_id=row.good_id,
                quantity=row.quantity,
            )
            session.add(record)
            session.flush()
            session.refresh(record)
            return _basket_to_schema(record)

    def get_basket(self, user_id: int) -> list[Basket]:
        with self._session() as session:
            rows = session.scalars(
                select(BasketRow).where(BasketRow.user_id == user_id).order_by(BasketRow.id)
            ).all()
            return [_basket_to_schema(row) for row in rows]

    # --- users ---

    def get_id_by_login(self, login: str) -> int:
        with self._session() as session:
            user_id = session.scalar(select(User.id).where(User.login == login))
            if user_id is None:
                raise RecordNotFound("user", login)
            return int(user_id)

    def create_user(self, user: Users) -> Users:
        with self._session() as session:
            record = User(id=user.id or None, login=user.login, name=user.name)
            session.add(record)
            session.flush()
            session.refresh(record)
            return _user_to_schema(record)
