from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import Dict, List

from schemas.basket import Basket
from schemas.goods import Goods
from schemas.users import Users
from services.errors import RecordNotFound, RepositoryError
from services.repository import Repository

logger = logging.getLogger(__name__)


class MemoryRepository(Repository):
    """
    Хранилище в памяти с теми же гарантиями, что и SQL-схема:
    - уникальный логин пользователя;
    - строка корзины ссылается на существующих пользователя и товар;
    - удаление товара удаляет его строки из корзины.

    В calls пишется имя каждой вызванной операции (удобно для тестов).
    """

    def __init__(self) -> None:
        self.goods: Dict[int, Goods] = {}
        self.basket: Dict[int, Basket] = {}
        self.users: Dict[int, Users] = {}

        self.calls: List[str] = []

        self._lock = threading.Lock()
        self._next_goods_id = 1
        self._next_basket_id = 1
        self._next_user_id = 1

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        logger.debug("memory repository: %s", operation)

    # --- goods ---

    def list_goods(self) -> list[Goods]:
        self._record("list_goods")
        with self._lock:
            return [self.goods[key].model_copy() for key in sorted(self.goods)]

    def get_objects_by_floor(self, floor: int) -> list[Goods]:
        self._record("get_objects_by_floor")
        with self._lock:
            return [
                self.goods[key].model_copy()
                for key in sorted(self.goods)
                if self.goods[key].floor == floor
            ]

    def get_product_by_id(self, product_id: int) -> Goods:
        self._record("get_product_by_id")
        with self._lock:
            item = self.goods.get(product_id)
            if item is None:
                raise RecordNotFound("goods", product_id)
            return item.model_copy()

    def change_product(self, product_id: int, price: Decimal) -> None:
        self._record("change_product")
        with self._lock:
            item = self.goods.get(product_id)
            if item is None:
                raise RecordNotFound("goods", product_id)
            self.goods[product_id] = item.model_copy(update={"price": Decimal(price)})

    def create_product(self, goods: Goods) -> Goods:
        self._record("create_product")
        with self._lock:
            product_id = goods.id or self._next_goods_id
            if product_id in self.goods:
                raise RepositoryError(f"goods {product_id} already exists")
            self._next_goods_id = max(self._next_goods_id, product_id + 1)
            stored = goods.model_copy(update={"id": product_id})
            self.goods[product_id] = stored
            return stored.model_copy()

    def delete_product(self, product_id: int) -> None:
        self._record("delete_product")
        with self._lock:
            if product_id not in self.goods:
                raise RecordNotFound("goods", product_id)
            del self.goods[product_id]
            for row_id in [key for key, row in self.basket.items() if row.good_id == product_id]:
                del self.basket[row_id]

    # --- basket ---

    def create_basket_row(self, row: Basket) -> Basket:
        self._record("create_basket_row")
        with self._lock:
            if row.user_id not in self.users:
                raise RepositoryError(f"user {row.user_id} does not exist")
            if row.good_id not in self.goods:
                raise RepositoryError(f"goods {row.good_id} does not exist")
            row_id = row.id or self._next_basket_id
            if row_id in self.basket:
                raise RepositoryError(f"basket row {row_id} already exists")
            self._next_basket_id = max(self._next_basket_id, row_id + 1)
            stored = row.model_copy(update={"id": row_id})
            self.basket[row_id] = stored
            return stored.model_copy()

    def get_basket(self, user_id: int) -> list[Basket]:
        self._record("get_basket")
        with self._lock:
            return [
                self.basket[key].model_copy()
                for key in sorted(self.basket)
                if self.basket[key].user_id == user_id
            ]

    # --- users ---

    def get_id_by_login(self, login: str) -> int:
        self._record("get_id_by_login")
        with self._lock:
            for user in self.users.values():
                if user.login == login:
                    return user.id
        raise RecordNotFound("user", login)

    def create_user(self, user: Users) -> Users:
        self._record("create_user")
        with self._lock:
            if any(existing.login == user.login for existing in self.users.values()):
                raise RepositoryError(f"login {user.login!r} is already taken")
            user_id = user.id or self._next_user_id
            if user_id in self.users:
                raise RepositoryError(f"user {user_id} already exists")
            self._next_user_id = max(self._next_user_id, user_id + 1)
            stored = user.model_copy(update={"id": user_id})
            self.users[user_id] = stored
            return stored.model_copy()
