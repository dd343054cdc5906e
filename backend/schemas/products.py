import uuid
from datetime import datetime
from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: int = Field(..., ge=0, description="Price in minor currency units")


class ProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    price: int
    created_at: datetime

    class Config:
        from_attributes = True
