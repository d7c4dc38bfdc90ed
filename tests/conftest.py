import os

# Config requires SECRET_KEY at import time
os.environ['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'test-secret')
os.environ.setdefault('FLASK_ENV', 'testing')

import pytest

from stockbook import create_app
from stockbook.models.inventory import MovementType, Product, StockMovement
from stockbook.models.seed import INITIAL_USERS
from stockbook.services.persistence import MemoryBlobStore
from stockbook.services.store import InventoryStore

# 2026-03-10 12:00:00 UTC, in epoch ms
NOW = 1773144000000


@pytest.fixture()
def app(tmp_path):
    db_file = tmp_path / 'test_stockbook.db'
    config = {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{db_file.as_posix()}',
        'SECRET_KEY': 'test-secret',
        'LOGIN_MAX_ATTEMPTS': 1000,
    }
    app = create_app(config=config)
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def logged_in_client(client):
    # Log in as admin
    rv = client.post('/auth/login', json={'email': 'admin@v254.com', 'password': 'password'})
    assert rv.status_code == 200
    assert rv.get_json()['success'] is True
    return client


@pytest.fixture()
def admin():
    return INITIAL_USERS[0]


@pytest.fixture()
def staff():
    return INITIAL_USERS[1]


def make_product(**overrides):
    fields = dict(
        id='p-test', sku='TP-001', name='Test Product', barcode='111', category='Testing',
        supplier='ACME', cost_price=10, sell_price=15, stock=2, low_stock_threshold=5,
    )
    fields.update(overrides)
    return Product(**fields)


def make_movement(**overrides):
    fields = dict(
        id='m-test', product_id='p-test', product_name='Test Product', type=MovementType.OUT,
        quantity=1, balance_after=1, user_id='u1', reason='Sale', timestamp=NOW,
    )
    fields.update(overrides)
    return StockMovement(**fields)


@pytest.fixture()
def memory_store():
    """Store over an in-memory adapter with the default seed collections."""
    return InventoryStore(MemoryBlobStore(), sku_prefix='V254', default_category='Vibrators').load()
