import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from crud import products as crud_products
from crud import regions as crud_regions
from crud import tables as crud_tables
from db.session import Store
from main import create_app


@pytest.fixture(scope='function')
def store():
    """Fresh in-memory database for each test."""
    store = Store(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    store.create_all()
    yield store
    store.close()


@pytest.fixture(scope='function')
def session(store):
    """Create database session for testing."""
    with store.session() as session:
        yield session


@pytest.fixture(scope='function')
def client(store):
    """Test client bound to the test store."""
    app = create_app(store)
    return TestClient(app)


@pytest.fixture(scope='function')
def region(session):
    """Create the 'Main' region."""
    return crud_regions.create_region(session, 'Main')


@pytest.fixture(scope='function')
def table1(session, region):
    """First table of the 'Main' region."""
    return crud_tables.add_table(session, region.id)


@pytest.fixture(scope='function')
def menu(session):
    """Two products on the menu."""
    return [
        crud_products.create_product(session, 'Kebab', 25),
        crud_products.create_product(session, 'Tea', 5),
    ]
