"""
Контракты хранилища для обработчиков HTTP.

Реализации:
- services.sql_repository.SqlRepository — SQLAlchemy (PostgreSQL / SQLite);
- services.memory_repository.MemoryRepository — в памяти, для тестов и демо.

Все ошибки хранилища поднимаются как RepositoryError,
отсутствие записи — как RecordNotFound.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from schemas.basket import Basket
from schemas.goods import Goods
from schemas.users import Users


class GoodsRepository(ABC):
    @abstractmethod
    def list_goods(self) -> list[Goods]:
        """Все товары, по возрастанию ID."""

    @abstractmethod
    def get_objects_by_floor(self, floor: int) -> list[Goods]:
        """Товары, у которых Floor точно равен floor."""

    @abstractmethod
    def get_product_by_id(self, product_id: int) -> Goods:
        """Товар по ID. RecordNotFound, если его нет."""

    @abstractmethod
    def change_product(self, product_id: int, price: Decimal) -> None:
        """Меняет цену товара. RecordNotFound, если его нет."""

    @abstractmethod
    def create_product(self, goods: Goods) -> Goods:
        """Сохраняет товар и возвращает сохранённую копию с присвоенным ID."""

    @abstractmethod
    def delete_product(self, product_id: int) -> None:
        """Удаляет товар. RecordNotFound, если его нет."""


class BasketRepository(ABC):
    @abstractmethod
    def create_basket_row(self, row: Basket) -> Basket:
        """Добавляет строку в корзину и возвращает её с присвоенным ID."""

    @abstractmethod
    def get_basket(self, user_id: int) -> list[Basket]:
        """Строки корзины пользователя в порядке добавления."""


class UsersRepository(ABC):
    @abstractmethod
    def get_id_by_login(self, login: str) -> int:
        """ID пользователя по логину. RecordNotFound, если логин неизвестен."""

    @abstractmethod
    def create_user(self, user: Users) -> Users:
        """Заводит пользователя (используется при начальном заполнении базы)."""


class Repository(GoodsRepository, BasketRepository, UsersRepository, ABC):
    """Полный набор операций, который получает приложение."""
