import uuid
from fastapi import APIRouter

from api.deps import SessionDep
from crud import tables as crud_tables
from schemas.tables import TableWithRegionResponse

router = APIRouter(prefix="/tables", tags=["tables"])


@router.get("", response_model=list[TableWithRegionResponse])
def list_all_tables(db: SessionDep):
    """List tables across all regions."""
    return crud_tables.list_all_tables(db)


@router.delete("/{table_id}", status_code=204)
def delete_table(table_id: uuid.UUID, db: SessionDep):
    """Remove a table. Its past sessions are kept."""
    crud_tables.delete_table(db, table_id)
    return None
