# backend/docvault/schemas/base.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class BaseSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True
    )

class TimestampMixin(BaseModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class MessageResponse(BaseSchema):
    success: bool = True
    message: str

class PageInfo(BaseModel):
    """Pagination block; key names are part of the public contract"""
    model_config = ConfigDict(populate_by_name=True)

    page_count: int
    page: int = Field(alias="Page")
    page_size: int
    total_count: int
