# bsg_helpdesk/ticket/schemas.py
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

TicketStatus = Literal["open", "closed"]

class TicketBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)

class TicketCreate(TicketBase):
    template_id: int | None = None
    custom_fields: dict[str, Any] = Field(default_factory=dict)

class TicketUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    status: TicketStatus | None = None

    # omitted is fine, explicit null is not
    @field_validator("title", "description", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

class TicketOut(TicketBase):
    id: int
    status: str
    template_id: int | None = None
    custom_fields: dict[str, Any] | None = None

    model_config = {"from_attributes": True}
