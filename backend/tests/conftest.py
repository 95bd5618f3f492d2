"""
Pytest fixtures for Stockbook backend tests.

Provides test database setup, boss/worker profiles, and test client.
"""

import pytest

from stockbook import create_app
from stockbook.extensions import db
from stockbook.services import auth_service, invite_service, inventory_service


PASSWORD = "Password123!"


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'TEXTGEN_API_KEY': '',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def boss(db_session):
    """A boss with an empty inventory."""
    return auth_service.sign_up("boss@shop.test", PASSWORD)


@pytest.fixture(scope='function')
def other_boss(db_session):
    """A second, unrelated shop."""
    return auth_service.sign_up("rival@shop.test", PASSWORD)


@pytest.fixture(scope='function')
def worker(db_session, boss):
    """A worker invited by `boss`."""
    invite_service.invite_worker(boss, "worker@shop.test")
    return auth_service.sign_up("worker@shop.test", PASSWORD)


@pytest.fixture(scope='function')
def stocked(boss):
    """
    Phones > Tecno Spark (buy 80, sell 150) with 5 items,
    Phones > Itel A70 (buy 50, sell 90) with 2 items.
    """
    phones = inventory_service.create_category(boss, "Phones")
    spark = inventory_service.create_sub_category(
        boss, phones.id, name="Tecno Spark", buying_price="80", selling_price="150"
    )
    itel = inventory_service.create_sub_category(
        boss, phones.id, name="Itel A70", buying_price="50", selling_price="90"
    )
    inventory_service.add_stock(boss, spark.id, 5)
    inventory_service.add_stock(boss, itel.id, 2)
    return {"category": phones, "spark": spark, "itel": itel}


@pytest.fixture(scope='function')
def boss_headers(client, boss):
    return auth_headers(get_auth_token(client, "boss@shop.test", PASSWORD))


@pytest.fixture(scope='function')
def worker_headers(client, worker):
    return auth_headers(get_auth_token(client, "worker@shop.test", PASSWORD))


def get_auth_token(client, email: str, password: str) -> str:
    """Helper to get auth token for a profile."""
    response = client.post('/api/auth/login', json={
        'email': email,
        'password': password
    })
    if response.status_code == 200:
        return response.json.get('token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


def item_numbers(sub_category_id: int) -> list[int]:
    from stockbook.models import Item
    return [
        item.item_number
        for item in db.session.query(Item)
        .filter_by(sub_category_id=sub_category_id)
        .order_by(Item.item_number)
        .all()
    ]
