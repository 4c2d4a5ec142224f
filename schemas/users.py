from pydantic import BaseModel, ConfigDict, Field


class Users(BaseModel):
    id: int = Field(default=0, alias="ID")
    login: str = Field(default="", alias="Login")
    name: str = Field(default="", alias="Name")

    model_config = ConfigDict(populate_by_name=True, strict=True)
