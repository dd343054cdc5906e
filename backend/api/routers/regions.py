import uuid
from fastapi import APIRouter

from api.deps import SessionDep
from crud import regions as crud_regions
from crud import tables as crud_tables
from crud import table_sessions as crud_sessions
from schemas.regions import RegionCreate, RegionResponse
from schemas.tables import FloorResponse, TableResponse
from schemas.table_sessions import TableSessionResponse

router = APIRouter(prefix="/regions", tags=["regions"])


@router.get("", response_model=list[RegionResponse])
def list_regions(db: SessionDep):
    """List regions ordered by name."""
    return crud_regions.list_regions(db)


@router.post("", response_model=RegionResponse, status_code=201)
def create_region(region_data: RegionCreate, db: SessionDep):
    """Create a new region."""
    return crud_regions.create_region(db, region_data.name)


@router.get("/{region_id}/tables", response_model=list[TableResponse])
def list_tables(region_id: uuid.UUID, db: SessionDep):
    """List the tables of a region."""
    return crud_tables.list_tables(db, region_id)


@router.post("/{region_id}/tables", response_model=TableResponse, status_code=201)
def add_table(region_id: uuid.UUID, db: SessionDep):
    """Add the next numbered table to a region."""
    return crud_tables.add_table(db, region_id)


@router.get("/{region_id}/floor", response_model=FloorResponse)
def get_floor(region_id: uuid.UUID, db: SessionDep):
    """Tables of a region together with their open sessions."""
    tables, sessions = crud_sessions.get_region_tables_and_sessions(db, region_id)
    return FloorResponse(
        tables=[TableResponse.model_validate(t) for t in tables],
        sessions={
            table_id: TableSessionResponse.model_validate(s)
            for table_id, s in sessions.items()
        },
    )


@router.post(
    "/{region_id}/tables/{table_number}/open",
    response_model=TableSessionResponse,
)
def open_table(region_id: uuid.UUID, table_number: int, db: SessionDep):
    """Open a table, or return its session if it is already open."""
    return crud_sessions.open_table(db, region_id, table_number)


@router.get(
    "/{region_id}/tables/{table_number}/session",
    response_model=TableSessionResponse | None,
)
def get_open_session(region_id: uuid.UUID, table_number: int, db: SessionDep):
    """Get the open session of a table; null when the table is free."""
    return crud_sessions.get_open_session(db, region_id, table_number)
