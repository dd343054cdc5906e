import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, DateTime, Index, func, text
from sqlmodel import SQLModel, Field, Relationship
from typing import TYPE_CHECKING

from core.config import settings

if TYPE_CHECKING:
    from models.restaurant_tables import RestaurantTable
    from models.table_session_items import TableSessionItem


class SessionStatus(str, Enum):
    OPEN = "open"
    PAID = "paid"
    CANCELED = "canceled"


class TableSession(SQLModel, table=True):
    __tablename__ = "table_sessions"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        sa_column_kwargs={"nullable": False}
    )
    table_id: uuid.UUID = Field(foreign_key="restaurant_tables.id", nullable=False, index=True)
    status: str = Field(default=SessionStatus.OPEN.value, max_length=20, nullable=False)  # open, paid, canceled
    total: int = Field(default=0, nullable=False)
    payment_method: str | None = Field(default=None, max_length=20, nullable=True)
    opened_at: datetime = Field(
        default_factory=lambda: datetime.now(settings.APP_TIMEZONE),
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    )
    closed_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(settings.APP_TIMEZONE),
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    )

    # At most one open session per table
    __table_args__ = (
        Index(
            "uq_table_sessions_open_table",
            "table_id",
            unique=True,
            sqlite_where=text("status = 'open'"),
            postgresql_where=text("status = 'open'"),
        ),
    )

    # Relationships
    table: "RestaurantTable" = Relationship(back_populates="sessions")
    items: list["TableSessionItem"] = Relationship(
        back_populates="session",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "TableSessionItem.name",
        }
    )
