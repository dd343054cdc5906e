import uuid
from datetime import datetime
from pydantic import BaseModel

from schemas.regions import RegionResponse
from schemas.table_sessions import TableSessionResponse


class TableResponse(BaseModel):
    id: uuid.UUID
    region_id: uuid.UUID
    table_number: int
    created_at: datetime

    class Config:
        from_attributes = True


class TableWithRegionResponse(TableResponse):
    region: RegionResponse


class FloorResponse(BaseModel):
    """Tables of a region plus the open session of each occupied table."""
    tables: list[TableResponse]
    sessions: dict[uuid.UUID, TableSessionResponse]
