"""
Tests for the region and table directory.
"""

import uuid
import pytest

from core.exceptions import InvalidStateError, NotFoundError
from crud import regions as crud_regions
from crud import tables as crud_tables
from crud import table_sessions as crud_sessions


class TestRegions:
    """Tests for region listing and creation."""

    def test_list_regions_ordered_by_name(self, session):
        """Regions come back sorted by name."""
        crud_regions.create_region(session, 'Terrace')
        crud_regions.create_region(session, 'Garden')
        crud_regions.create_region(session, 'Main')

        names = [r.name for r in crud_regions.list_regions(session)]
        assert names == ['Garden', 'Main', 'Terrace']

    def test_list_regions_empty(self, session):
        assert crud_regions.list_regions(session) == []

    def test_duplicate_region_names_allowed(self, session):
        """Region names are not checked for uniqueness."""
        first = crud_regions.create_region(session, 'Main')
        second = crud_regions.create_region(session, 'Main')

        assert first.id != second.id
        assert len(crud_regions.list_regions(session)) == 2


class TestAddTable:
    """Tests for per-region table numbering."""

    def test_first_table_is_number_one(self, session, region):
        table = crud_tables.add_table(session, region.id)
        assert table.table_number == 1
        assert table.region_id == region.id

    def test_next_number_follows_max(self, session, region):
        """A region with tables 1, 2, 3 gets table 4 next."""
        for _ in range(3):
            crud_tables.add_table(session, region.id)

        table = crud_tables.add_table(session, region.id)
        assert table.table_number == 4

    def test_numbering_is_per_region(self, session, region):
        other = crud_regions.create_region(session, 'Terrace')
        crud_tables.add_table(session, region.id)
        crud_tables.add_table(session, region.id)

        table = crud_tables.add_table(session, other.id)
        assert table.table_number == 1

    def test_unknown_region(self, session):
        with pytest.raises(NotFoundError):
            crud_tables.add_table(session, uuid.uuid4())

    def test_deleted_numbers_are_not_reused(self, session, region):
        crud_tables.add_table(session, region.id)
        second = crud_tables.add_table(session, region.id)
        crud_tables.delete_table(session, second.id)

        table = crud_tables.add_table(session, region.id)
        assert table.table_number == 3


class TestListTables:
    """Tests for table listings."""

    def test_list_tables_ordered(self, session, region):
        for _ in range(3):
            crud_tables.add_table(session, region.id)

        numbers = [t.table_number for t in crud_tables.list_tables(session, region.id)]
        assert numbers == [1, 2, 3]

    def test_list_tables_unknown_region_is_empty(self, session):
        assert crud_tables.list_tables(session, uuid.uuid4()) == []

    def test_list_all_tables_includes_region(self, session, region):
        other = crud_regions.create_region(session, 'Terrace')
        crud_tables.add_table(session, region.id)
        crud_tables.add_table(session, other.id)
        crud_tables.add_table(session, other.id)

        tables = crud_tables.list_all_tables(session)
        assert [t.table_number for t in tables] == [1, 1, 2]
        assert {t.region.name for t in tables} == {'Main', 'Terrace'}


class TestDeleteTable:
    """Tests for soft-deleting tables."""

    def test_delete_hides_table(self, session, region, table1):
        crud_tables.delete_table(session, table1.id)

        assert crud_tables.list_tables(session, region.id) == []
        assert crud_sessions.get_open_session(session, region.id, 1) is None

    def test_delete_keeps_session_history(self, session, region, table1):
        opened = crud_sessions.open_table(session, region.id, 1)
        crud_sessions.pay_session(session, opened.id, 'cash')

        crud_tables.delete_table(session, table1.id)

        paid = crud_sessions.list_paid_sessions(session)
        assert [s.id for s in paid] == [opened.id]
        assert paid[0].table_id == table1.id

    def test_delete_with_open_session_rejected(self, session, region, table1):
        crud_sessions.open_table(session, region.id, 1)

        with pytest.raises(InvalidStateError):
            crud_tables.delete_table(session, table1.id)
        assert len(crud_tables.list_tables(session, region.id)) == 1

    def test_delete_unknown_table(self, session):
        with pytest.raises(NotFoundError):
            crud_tables.delete_table(session, uuid.uuid4())

    def test_delete_twice(self, session, table1):
        crud_tables.delete_table(session, table1.id)
        with pytest.raises(NotFoundError):
            crud_tables.delete_table(session, table1.id)
