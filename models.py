"""
ORM-модели SQLAlchemy: товары, корзина, пользователи.
"""

from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from database import Base

# Идентификаторы 64-битные, как и разбор id в пути; SQLite автоинкрементирует только INTEGER
IdType = BigInteger().with_variant(Integer(), "sqlite")


class Goods(Base):
    __tablename__ = "goods"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False, default=0)
    quantity = Column(Integer, nullable=False, default=0)
    floor = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    basket_rows = relationship("BasketRow", back_populates="good", passive_deletes=True)


class User(Base):
    __tablename__ = "users"

    id = Column(IdType, primary_key=True, autoincrement=True)
    login = Column(String(128), unique=True, nullable=False)
    name = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    basket_rows = relationship("BasketRow", back_populates="user", passive_deletes=True)


class BasketRow(Base):
    __tablename__ = "basket"

    id = Column(IdType, primary_key=True, autoincrement=True)
    user_id = Column(IdType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    good_id = Column(IdType, ForeignKey("goods.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="basket_rows")
    good = relationship("Goods", back_populates="basket_rows")

    __table_args__ = (Index("ix_basket_user_id", "user_id"),)
