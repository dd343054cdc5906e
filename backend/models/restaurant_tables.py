import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, UniqueConstraint, func
from sqlmodel import SQLModel, Field, Relationship
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.regions import Region
    from models.table_sessions import TableSession


class RestaurantTable(SQLModel, table=True):
    __tablename__ = "restaurant_tables"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        sa_column_kwargs={"nullable": False}
    )
    region_id: uuid.UUID = Field(foreign_key="regions.id", nullable=False, index=True)
    table_number: int = Field(nullable=False)
    # Soft-delete flag, sessions keep pointing at inactive tables
    is_active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(),
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    )

    # Unique constraint on (region_id, table_number)
    __table_args__ = (
        UniqueConstraint("region_id", "table_number", name="uq_restaurant_tables_region_number"),
    )

    # Relationships
    region: "Region" = Relationship(
        back_populates="tables",
        sa_relationship_kwargs={"lazy": "selectin"}
    )
    sessions: list["TableSession"] = Relationship(back_populates="table")
