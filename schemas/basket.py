from pydantic import BaseModel, ConfigDict, Field


class Basket(BaseModel):
    """Одна строка корзины: пользователь, товар и количество."""

    id: int = Field(default=0, alias="ID")
    user_id: int = Field(default=0, alias="UserID")
    good_id: int = Field(default=0, alias="GoodID")
    quantity: int = Field(default=0, alias="Quantity")

    model_config = ConfigDict(populate_by_name=True, strict=True)
