import uuid
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.table_sessions import TableSession


class TableSessionItem(SQLModel, table=True):
    """Name and price are copied from the product at order time."""

    __tablename__ = "table_session_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        sa_column_kwargs={"nullable": False}
    )
    session_id: uuid.UUID = Field(foreign_key="table_sessions.id", nullable=False, index=True)
    name: str = Field(max_length=200, nullable=False)
    price: int = Field(nullable=False)  # in minor currency units
    quantity: int = Field(nullable=False)

    __table_args__ = (
        UniqueConstraint("session_id", "name", name="uq_table_session_items_session_name"),
    )

    # Relationships
    session: "TableSession" = Relationship(back_populates="items")
