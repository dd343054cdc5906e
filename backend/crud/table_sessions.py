import uuid
import logging
from datetime import datetime
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, Session

from core.config import settings
from core.exceptions import ConstraintViolationError, InvalidStateError, NotFoundError
from crud.tables import claim_table, get_table_by_number, list_tables
from models.restaurant_tables import RestaurantTable
from models.table_sessions import SessionStatus, TableSession

logger = logging.getLogger(__name__)


def _find_open_session(
    db: Session,
    table_id: uuid.UUID
) -> TableSession | None:
    return db.exec(
        select(TableSession)
        .where(
            TableSession.table_id == table_id,
            TableSession.status == SessionStatus.OPEN.value,
        )
        .execution_options(populate_existing=True)
    ).first()


def get_session_by_id(
    db: Session,
    session_id: uuid.UUID
) -> TableSession | None:
    """Get a session by its ID."""
    return db.get(TableSession, session_id)


def claim_open_session(
    db: Session,
    session_id: uuid.UUID
) -> TableSession:
    """
    Lock an open session for the rest of the transaction and reload it.

    The guarded UPDATE is the first statement, so the lock (the database
    write lock on SQLite, the row lock elsewhere) is held before anything is
    read. Raises NotFoundError for a missing session and InvalidStateError
    for a closed one; in both cases the transaction is rolled back.
    """
    claimed = db.exec(
        update(TableSession)
        .where(
            TableSession.id == session_id,
            TableSession.status == SessionStatus.OPEN.value,
        )
        .values(updated_at=datetime.now(settings.APP_TIMEZONE))
        .execution_options(synchronize_session=False)
    ).rowcount

    session = db.exec(
        select(TableSession)
        .where(TableSession.id == session_id)
        .execution_options(populate_existing=True)
    ).first()
    if not session:
        db.rollback()
        raise NotFoundError(f"Session {session_id} not found")
    if not claimed:
        status = session.status
        db.rollback()
        raise InvalidStateError(f"Session {session_id} is already {status}")
    return session


def open_table(
    db: Session,
    region_id: uuid.UUID,
    table_number: int
) -> TableSession:
    """
    Return the open session of a table, creating one if the table is free.

    Calling this repeatedly on an occupied table returns the same session.
    The table is claimed before the open-session check, and the partial
    unique index on open sessions catches any opener that still slips past
    it: in that case the winner's session is returned.
    """
    table = claim_table(db, region_id, table_number)
    if not table:
        db.rollback()
        raise NotFoundError(f"Table {table_number} not found in region {region_id}")

    session = _find_open_session(db, table.id)
    if session:
        # Release the claim
        db.commit()
        db.refresh(session)
        return session

    table_id = table.id
    session = TableSession(table_id=table_id, status=SessionStatus.OPEN.value, total=0)
    db.add(session)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Lost race opening table {table_number} in region {region_id}")
        existing = _find_open_session(db, table_id)
        if existing is None:
            raise ConstraintViolationError(
                f"Could not open a session for table {table_number} in region {region_id}"
            )
        return existing

    db.refresh(session)
    logger.info(f"Opened session {session.id} on table {table_number} (region {region_id})")
    return session


def get_open_session(
    db: Session,
    region_id: uuid.UUID,
    table_number: int
) -> TableSession | None:
    """Get the open session of a table, or None if the table is unknown or free."""
    table = get_table_by_number(db, region_id, table_number)
    if not table:
        return None
    return _find_open_session(db, table.id)


def _close_session(
    db: Session,
    session_id: uuid.UUID,
    status: SessionStatus,
    payment_method: str | None = None
) -> TableSession:
    session = claim_open_session(db, session_id)

    session.status = status.value
    session.payment_method = payment_method
    session.closed_at = datetime.now(settings.APP_TIMEZONE)

    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info(f"Session {session.id} {status.value} (total={session.total})")
    return session


def pay_session(
    db: Session,
    session_id: uuid.UUID,
    payment_method: str
) -> TableSession:
    """Mark an open session as paid."""
    return _close_session(db, session_id, SessionStatus.PAID, payment_method)


def cancel_session(db: Session, session_id: uuid.UUID) -> TableSession:
    """Mark an open session as canceled."""
    return _close_session(db, session_id, SessionStatus.CANCELED)


def _list_closed_sessions(db: Session, status: SessionStatus) -> list[TableSession]:
    return db.exec(
        select(TableSession)
        .where(TableSession.status == status.value)
        .order_by(TableSession.closed_at.desc().nulls_last())
    ).all()


def list_paid_sessions(db: Session) -> list[TableSession]:
    """Paid sessions, most recently closed first."""
    return _list_closed_sessions(db, SessionStatus.PAID)


def list_canceled_sessions(db: Session) -> list[TableSession]:
    """Canceled sessions, most recently closed first."""
    return _list_closed_sessions(db, SessionStatus.CANCELED)


def get_region_tables_and_sessions(
    db: Session,
    region_id: uuid.UUID
) -> tuple[list[RestaurantTable], dict[uuid.UUID, TableSession]]:
    """
    Fetch a region's tables and their open sessions in two queries.

    Returns the tables and a map of table id to open session; free tables
    are absent from the map. The two reads are not one snapshot, so a
    session opened between them can be missed until the next refresh.
    """
    tables = list_tables(db, region_id)
    table_ids = [t.id for t in tables]
    if not table_ids:
        return tables, {}

    sessions = db.exec(
        select(TableSession).where(
            TableSession.table_id.in_(table_ids),
            TableSession.status == SessionStatus.OPEN.value,
        )
    ).all()

    return tables, {s.table_id: s for s in sessions}
