"""
Tests for order reconciliation.
"""

import uuid
import pytest

from core.exceptions import ConstraintViolationError, InvalidStateError, NotFoundError
from crud import order_items as crud_items
from crud import table_sessions as crud_sessions
from schemas.table_sessions import OrderItemIn


def item(name, price, quantity):
    return OrderItemIn(name=name, price=price, quantity=quantity)


def lines(session_obj):
    return sorted((i.name, i.price, i.quantity) for i in session_obj.items)


@pytest.fixture
def open_session(session, region, table1):
    return crud_sessions.open_table(session, region.id, 1)


class TestReconcileItems:
    """Tests for replace-all reconciliation."""

    def test_zero_quantity_lines_dropped(self, session, open_session):
        updated = crud_items.reconcile_items(
            session, open_session.id, [item('A', 10, 2), item('B', 5, 0)]
        )

        assert lines(updated) == [('A', 10, 2)]
        assert updated.total == 20

    def test_replace_removes_previous_lines(self, session, open_session):
        """Lines missing from the new list do not linger."""
        crud_items.reconcile_items(session, open_session.id, [item('A', 10, 2)])
        updated = crud_items.reconcile_items(
            session, open_session.id, [item('A', 10, 0), item('B', 5, 3)]
        )

        assert lines(updated) == [('B', 5, 3)]
        assert updated.total == 15
        assert len(crud_items.get_items_by_session_id(session, open_session.id)) == 1

    def test_same_name_reinserted(self, session, open_session):
        crud_items.reconcile_items(session, open_session.id, [item('A', 10, 2)])
        updated = crud_items.reconcile_items(session, open_session.id, [item('A', 12, 5)])

        assert lines(updated) == [('A', 12, 5)]
        assert updated.total == 60

    def test_all_zero_list(self, session, open_session):
        crud_items.reconcile_items(session, open_session.id, [item('A', 10, 2)])
        updated = crud_items.reconcile_items(
            session, open_session.id, [item('A', 10, 0), item('B', 5, 0)]
        )

        assert updated.items == []
        assert updated.total == 0
        assert updated.status == 'open'

    def test_duplicate_names_rejected(self, session, open_session):
        crud_items.reconcile_items(session, open_session.id, [item('A', 10, 1)])

        with pytest.raises(ConstraintViolationError):
            crud_items.reconcile_items(
                session, open_session.id, [item('B', 5, 1), item('B', 5, 2)]
            )

        session.refresh(open_session)
        assert lines(open_session) == [('A', 10, 1)]
        assert open_session.total == 10

    def test_unknown_session(self, session):
        with pytest.raises(NotFoundError):
            crud_items.reconcile_items(session, uuid.uuid4(), [item('A', 10, 1)])

    def test_closed_session_rejected(self, session, open_session):
        crud_items.reconcile_items(session, open_session.id, [item('A', 10, 1)])
        crud_sessions.pay_session(session, open_session.id, 'cash')

        with pytest.raises(InvalidStateError):
            crud_items.reconcile_items(session, open_session.id, [item('B', 5, 4)])

        paid = crud_sessions.get_session_by_id(session, open_session.id)
        assert lines(paid) == [('A', 10, 1)]
        assert paid.total == 10

    def test_sessions_are_independent(self, session, region, open_session):
        from crud import tables as crud_tables
        crud_tables.add_table(session, region.id)
        other = crud_sessions.open_table(session, region.id, 2)

        crud_items.reconcile_items(session, open_session.id, [item('A', 10, 1)])
        crud_items.reconcile_items(session, other.id, [item('A', 10, 3)])

        assert crud_sessions.get_session_by_id(session, open_session.id).total == 10
        assert crud_sessions.get_session_by_id(session, other.id).total == 30


class TestMergeItems:
    """Tests for incremental item updates."""

    def test_merge_keeps_unmentioned_lines(self, session, open_session):
        crud_items.reconcile_items(session, open_session.id, [item('A', 10, 2)])
        updated = crud_items.merge_items(session, open_session.id, [item('B', 5, 1)])

        assert lines(updated) == [('A', 10, 2), ('B', 5, 1)]
        assert updated.total == 25

    def test_merge_updates_quantity(self, session, open_session):
        crud_items.merge_items(session, open_session.id, [item('A', 10, 2)])
        updated = crud_items.merge_items(session, open_session.id, [item('A', 10, 4)])

        assert lines(updated) == [('A', 10, 4)]
        assert updated.total == 40

    def test_merge_zero_removes_line(self, session, open_session):
        crud_items.merge_items(session, open_session.id, [item('A', 10, 2), item('B', 5, 1)])
        updated = crud_items.merge_items(session, open_session.id, [item('A', 10, 0)])

        assert lines(updated) == [('B', 5, 1)]
        assert updated.total == 5

    def test_merge_closed_session_rejected(self, session, open_session):
        crud_sessions.cancel_session(session, open_session.id)
        with pytest.raises(InvalidStateError):
            crud_items.merge_items(session, open_session.id, [item('A', 10, 1)])


class TestSubmitOrder:
    """Tests for saving the full menu selection."""

    def test_submit_filters_zero_lines(self, session, open_session, menu):
        kebab, tea = menu
        updated = crud_items.submit_order(session, open_session.id, [
            item(kebab.name, kebab.price, 1),
            item(tea.name, tea.price, 0),
        ])

        assert updated.status == 'open'
        assert lines(updated) == [('Kebab', 25, 1)]
        assert updated.total == 25

    def test_empty_submit_cancels_session(self, session, region, open_session, menu):
        updated = crud_items.submit_order(
            session, open_session.id, [item(p.name, p.price, 0) for p in menu]
        )

        assert updated.status == 'canceled'
        assert updated.closed_at is not None
        assert crud_sessions.get_open_session(session, region.id, 1) is None


class TestEndToEnd:
    """Open a table, order, pay."""

    def test_full_flow(self, session, menu):
        from crud import regions as crud_regions
        from crud import tables as crud_tables

        main = crud_regions.create_region(session, 'Main')
        table = crud_tables.add_table(session, main.id)
        assert table.table_number == 1

        opened = crud_sessions.open_table(session, main.id, 1)
        assert opened.status == 'open'
        assert opened.total == 0

        updated = crud_items.reconcile_items(session, opened.id, [
            item('Kebab', 25, 1),
            item('Tea', 5, 2),
        ])
        assert updated.total == 35

        paid = crud_sessions.pay_session(session, opened.id, 'cash')
        assert paid.status == 'paid'
        assert paid.closed_at is not None
        assert crud_sessions.get_open_session(session, main.id, 1) is None
