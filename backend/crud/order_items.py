import uuid
import logging
from collections.abc import Sequence
from sqlalchemy import delete, func
from sqlmodel import select, Session

from core.exceptions import ConstraintViolationError
from crud.table_sessions import cancel_session, claim_open_session
from models.table_session_items import TableSessionItem
from models.table_sessions import TableSession
from schemas.table_sessions import OrderItemIn

logger = logging.getLogger(__name__)


def get_items_by_session_id(
    db: Session,
    session_id: uuid.UUID
) -> list[TableSessionItem]:
    """Get all line items for a session."""
    return db.exec(
        select(TableSessionItem)
        .where(TableSessionItem.session_id == session_id)
        .order_by(TableSessionItem.name)
        .execution_options(populate_existing=True)
    ).all()


def _check_unique_names(items: Sequence[OrderItemIn]) -> None:
    seen = set()
    for item in items:
        if item.name in seen:
            raise ConstraintViolationError(f"Item {item.name!r} appears more than once")
        seen.add(item.name)


def _stored_total(db: Session, session_id: uuid.UUID) -> int:
    return db.exec(
        select(func.coalesce(func.sum(TableSessionItem.price * TableSessionItem.quantity), 0))
        .where(TableSessionItem.session_id == session_id)
    ).one()


def _finish_write(db: Session, session: TableSession) -> TableSession:
    db.flush()
    db.expire(session, ["items"])
    session.total = _stored_total(db, session.id)
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def reconcile_items(
    db: Session,
    session_id: uuid.UUID,
    items: Sequence[OrderItemIn]
) -> TableSession:
    """
    Replace every line item of an open session and recompute its total.

    Entries with zero quantity are dropped. The session is claimed before
    its lines are touched; the delete, the inserts and the total update are
    committed together and any failure rolls all of them back. The total is
    summed from the stored rows, never from the request.
    """
    lines = [i for i in items if i.quantity > 0]
    _check_unique_names(lines)

    session = claim_open_session(db, session_id)

    db.exec(delete(TableSessionItem).where(TableSessionItem.session_id == session_id))
    for line in lines:
        db.add(TableSessionItem(
            session_id=session_id,
            name=line.name,
            price=line.price,
            quantity=line.quantity,
        ))

    session = _finish_write(db, session)
    logger.info(f"Reconciled session {session_id}: {len(lines)} lines, total={session.total}")
    return session


def merge_items(
    db: Session,
    session_id: uuid.UUID,
    items: Sequence[OrderItemIn]
) -> TableSession:
    """
    Upsert the given lines by name, leaving other stored lines untouched.

    A zero quantity removes the line. The total is recomputed over every
    line stored after the merge.
    """
    _check_unique_names(items)

    session = claim_open_session(db, session_id)

    stored = {i.name: i for i in get_items_by_session_id(db, session_id)}
    for item in items:
        line = stored.get(item.name)
        if item.quantity == 0:
            if line:
                db.delete(line)
        elif line:
            line.price = item.price
            line.quantity = item.quantity
            db.add(line)
        else:
            db.add(TableSessionItem(
                session_id=session_id,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
            ))

    session = _finish_write(db, session)
    logger.info(f"Merged {len(items)} items into session {session_id}, total={session.total}")
    return session


def submit_order(
    db: Session,
    session_id: uuid.UUID,
    items: Sequence[OrderItemIn]
) -> TableSession:
    """
    Save the order screen's full catalog, zero quantities included.

    An order with nothing selected cancels the session rather than keeping
    an empty open tab.
    """
    if sum(i.quantity for i in items) == 0:
        logger.info(f"Empty order submitted for session {session_id}, canceling")
        return cancel_session(db, session_id)

    return reconcile_items(db, session_id, [i for i in items if i.quantity > 0])
