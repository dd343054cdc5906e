import uuid
from datetime import datetime
from pydantic import BaseModel, Field


class RegionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class RegionResponse(BaseModel):
    id: uuid.UUID
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
