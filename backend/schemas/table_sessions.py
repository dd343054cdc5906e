import uuid
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"


class OrderItemIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: int = Field(..., ge=0, description="Unit price in minor currency units")
    quantity: int = Field(..., ge=0)


class TableSessionItemResponse(BaseModel):
    id: uuid.UUID
    session_id: uuid.UUID
    name: str
    price: int
    quantity: int

    class Config:
        from_attributes = True


class TableSessionResponse(BaseModel):
    id: uuid.UUID
    table_id: uuid.UUID
    status: str
    total: int
    payment_method: Optional[str]
    opened_at: datetime
    closed_at: Optional[datetime]
    items: list[TableSessionItemResponse] = []

    class Config:
        from_attributes = True


class SessionPay(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CASH
