"""Fields shared by every stored record."""
from datetime import datetime

from pydantic import BaseModel, Field


class Record(BaseModel):
    """Base for stored records: id plus store-assigned timestamps."""

    id: str = Field(alias="_id", serialization_alias="id")
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
