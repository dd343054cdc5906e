import uuid
import logging
from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, Session

from core.exceptions import ConstraintViolationError, InvalidStateError, NotFoundError
from crud.regions import get_region_by_id
from models.restaurant_tables import RestaurantTable
from models.table_sessions import SessionStatus, TableSession

logger = logging.getLogger(__name__)


def list_tables(
    db: Session,
    region_id: uuid.UUID
) -> list[RestaurantTable]:
    """List the active tables of a region ordered by table number."""
    return db.exec(
        select(RestaurantTable)
        .where(
            RestaurantTable.region_id == region_id,
            RestaurantTable.is_active == True,  # noqa: E712
        )
        .order_by(RestaurantTable.table_number)
    ).all()


def list_all_tables(db: Session) -> list[RestaurantTable]:
    """List the active tables of every region; each carries its region."""
    return db.exec(
        select(RestaurantTable)
        .where(RestaurantTable.is_active == True)  # noqa: E712
        .order_by(RestaurantTable.table_number, RestaurantTable.region_id)
    ).all()


def _active_table_conditions(region_id: uuid.UUID, table_number: int):
    return (
        RestaurantTable.region_id == region_id,
        RestaurantTable.table_number == table_number,
        RestaurantTable.is_active == True,  # noqa: E712
    )


def get_table_by_number(
    db: Session,
    region_id: uuid.UUID,
    table_number: int
) -> RestaurantTable | None:
    """Resolve an active table by its region and per-region number."""
    return db.exec(
        select(RestaurantTable).where(*_active_table_conditions(region_id, table_number))
    ).first()


def claim_table(
    db: Session,
    region_id: uuid.UUID,
    table_number: int
) -> RestaurantTable | None:
    """
    Lock an active table for the rest of the transaction and load it.

    The guarded UPDATE is issued before any read, so it takes the row lock
    (the database write lock on SQLite) that open and delete both need.
    Returns None when no active table matches.
    """
    conditions = _active_table_conditions(region_id, table_number)
    claimed = db.exec(
        update(RestaurantTable)
        .where(*conditions)
        .values(is_active=True)
        .execution_options(synchronize_session=False)
    ).rowcount
    if not claimed:
        return None
    return db.exec(
        select(RestaurantTable)
        .where(*conditions)
        .execution_options(populate_existing=True)
    ).first()


def add_table(db: Session, region_id: uuid.UUID) -> RestaurantTable:
    """
    Add a table to a region with the next sequence number.

    Soft-deleted tables still count, so numbers are never handed out twice.
    """
    region = get_region_by_id(db, region_id)
    if not region:
        raise NotFoundError(f"Region {region_id} not found")

    current_max = db.exec(
        select(func.max(RestaurantTable.table_number))
        .where(RestaurantTable.region_id == region_id)
    ).one()
    next_number = (current_max or 0) + 1

    table = RestaurantTable(region_id=region_id, table_number=next_number)
    db.add(table)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConstraintViolationError(
            f"Table number {next_number} was taken concurrently in region {region_id}"
        )
    db.refresh(table)
    logger.info(f"Added table {table.table_number} to region {region.name!r}")
    return table


def _has_open_session(db: Session, table_id: uuid.UUID) -> bool:
    return db.exec(
        select(TableSession.id).where(
            TableSession.table_id == table_id,
            TableSession.status == SessionStatus.OPEN.value,
        )
    ).first() is not None


def delete_table(db: Session, table_id: uuid.UUID) -> RestaurantTable:
    """
    Soft-delete a table. Tables with an open session cannot be removed.

    The table is deactivated first and the open-session check runs under
    that lock, so an open_table cannot slip in between check and write.
    """
    claimed = db.exec(
        update(RestaurantTable)
        .where(
            RestaurantTable.id == table_id,
            RestaurantTable.is_active == True,  # noqa: E712
        )
        .values(is_active=False)
        .execution_options(synchronize_session=False)
    ).rowcount
    if not claimed:
        db.rollback()
        raise NotFoundError(f"Table {table_id} not found")

    table_number = db.exec(
        select(RestaurantTable.table_number).where(RestaurantTable.id == table_id)
    ).one()
    if _has_open_session(db, table_id):
        db.rollback()
        raise InvalidStateError(
            f"Table {table_number} has an open session and cannot be removed"
        )

    db.commit()
    table = db.get(RestaurantTable, table_id)
    db.refresh(table)
    logger.info(f"Removed table {table.table_number} from region {table.region_id}")
    return table
