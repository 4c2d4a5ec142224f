from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Goods(BaseModel):
    """Товар в формате API: ключи в PascalCase, отсутствующие поля получают нулевые значения."""

    id: int = Field(default=0, alias="ID")
    name: str = Field(default="", alias="Name")
    description: str = Field(default="", alias="Description")
    # Те же границы, что у колонки Numeric(10, 2)
    price: Decimal = Field(
        default=Decimal("0"),
        alias="Price",
        strict=False,
        max_digits=10,
        decimal_places=2,
    )
    quantity: int = Field(default=0, alias="Quantity")
    floor: int = Field(default=0, alias="Floor")

    model_config = ConfigDict(populate_by_name=True, strict=True)

    @field_validator("price", mode="before")
    @classmethod
    def _price_must_be_number(cls, value: object) -> object:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError("Price must be a JSON number")
        return value

    @field_serializer("price")
    def _price_as_number(self, value: Decimal) -> float:
        return float(value)
