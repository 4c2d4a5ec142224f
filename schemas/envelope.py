from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EnvelopeStatus(str, Enum):
    successful = "successful"
    error = "error"


class AnswerJSON(BaseModel):
    """Единый ответ без полезной нагрузки: {"Status": ..., "Description": ...}."""

    status: EnvelopeStatus = Field(alias="Status")
    description: str = Field(alias="Description")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def ok(cls, description: str) -> "AnswerJSON":
        return cls(status=EnvelopeStatus.successful, description=description)

    @classmethod
    def fail(cls, description: str) -> "AnswerJSON":
        return cls(status=EnvelopeStatus.error, description=description)

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True)
