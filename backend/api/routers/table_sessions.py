import uuid
from fastapi import APIRouter

from api.deps import SessionDep
from core.exceptions import NotFoundError
from crud import order_items as crud_items
from crud import table_sessions as crud_sessions
from schemas.table_sessions import (
    OrderItemIn,
    SessionPay,
    TableSessionItemResponse,
    TableSessionResponse,
)

router = APIRouter(prefix="/table_sessions", tags=["table_sessions"])


@router.get("/paid", response_model=list[TableSessionResponse])
def list_paid_sessions(db: SessionDep):
    """Paid sessions, most recently closed first."""
    return crud_sessions.list_paid_sessions(db)


@router.get("/canceled", response_model=list[TableSessionResponse])
def list_canceled_sessions(db: SessionDep):
    """Canceled sessions, most recently closed first."""
    return crud_sessions.list_canceled_sessions(db)


@router.get("/{session_id}", response_model=TableSessionResponse)
def get_session(session_id: uuid.UUID, db: SessionDep):
    """Get session information."""
    session = crud_sessions.get_session_by_id(db, session_id)
    if not session:
        raise NotFoundError(f"Session {session_id} not found")
    return session


@router.get("/{session_id}/items", response_model=list[TableSessionItemResponse])
def get_session_items(session_id: uuid.UUID, db: SessionDep):
    """Get line items for a session."""
    session = crud_sessions.get_session_by_id(db, session_id)
    if not session:
        raise NotFoundError(f"Session {session_id} not found")
    return crud_items.get_items_by_session_id(db, session_id)


@router.put("/{session_id}/items", response_model=TableSessionResponse)
def reconcile_items(session_id: uuid.UUID, items: list[OrderItemIn], db: SessionDep):
    """Replace the session's items with the given list."""
    return crud_items.reconcile_items(db, session_id, items)


@router.patch("/{session_id}/items", response_model=TableSessionResponse)
def merge_items(session_id: uuid.UUID, items: list[OrderItemIn], db: SessionDep):
    """Update only the given items; a zero quantity removes the line."""
    return crud_items.merge_items(db, session_id, items)


@router.put("/{session_id}/order", response_model=TableSessionResponse)
def submit_order(session_id: uuid.UUID, items: list[OrderItemIn], db: SessionDep):
    """Save the full menu selection; an empty selection cancels the session."""
    return crud_items.submit_order(db, session_id, items)


@router.put("/{session_id}/pay", response_model=TableSessionResponse)
def pay_session(session_id: uuid.UUID, pay_data: SessionPay, db: SessionDep):
    """Close a session as paid."""
    return crud_sessions.pay_session(db, session_id, pay_data.payment_method.value)


@router.put("/{session_id}/cancel", response_model=TableSessionResponse)
def cancel_session(session_id: uuid.UUID, db: SessionDep):
    """Close a session as canceled."""
    return crud_sessions.cancel_session(db, session_id)
