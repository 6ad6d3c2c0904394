from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Database
from main import create_app
from models.buyer import Buyer
from models.category import Category
from models.pickup_point import PickupPoint
from models.product import Product
from models.supplier import Supplier


@pytest.fixture()
def database():
    database = Database("sqlite://")
    database.connect()
    yield database
    database.close()


@pytest.fixture()
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture()
def app():
    return create_app(Settings(DATABASE_URL="sqlite://", LOG_LEVEL="WARNING"))


@pytest.fixture()
def client(app):
    # Entering the context runs the lifespan, i.e. connects the database
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def client_db(client):
    session = client.app.state.database.session()
    yield session
    session.close()


def _seed(session):
    supplier = Supplier(name="Acme Kitchen", inn="7701234567", email="sales@acme.test")
    category = Category(name="Kitchen")
    buyer = Buyer(name="Ivan Petrov", email="ivan@example.com", phone="+7 900 000-00-00")
    pickup = PickupPoint(name="Central", address="Lenina st. 1")
    session.add_all([supplier, category, buyer, pickup])
    session.flush()

    kettle = Product(name="Kettle", price=Decimal("1000"), category_id=category.id, manufacturer_id=supplier.id)
    mug = Product(name="Mug", price=Decimal("500"), category_id=category.id, manufacturer_id=supplier.id)
    session.add_all([kettle, mug])
    session.commit()

    return SimpleNamespace(
        buyer_id=buyer.id,
        pickup_id=pickup.id,
        supplier_id=supplier.id,
        category_id=category.id,
        kettle_id=kettle.id,
        mug_id=mug.id,
    )


@pytest.fixture()
def catalog(db):
    """Buyer, pickup point and two products priced 1000 (kettle) and 500 (mug)."""
    return _seed(db)


@pytest.fixture()
def api_catalog(client_db):
    return _seed(client_db)


@pytest.fixture()
def file_database(tmp_path):
    """A SQLite file with a real connection pool, for tests that need several connections."""
    database = Database(f"sqlite:///{tmp_path / 'storefront.db'}")
    database.connect()
    yield database
    database.close()


@pytest.fixture()
def file_catalog(file_database):
    session = file_database.session()
    try:
        return _seed(session)
    finally:
        session.close()
