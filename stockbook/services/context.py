"""
Request-scoped access to the inventory store and the static user list
"""
from flask import current_app, g

from stockbook.models.seed import INITIAL_USERS
from stockbook.services.persistence import SqlBlobStore
from stockbook.services.store import InventoryStore


def get_store() -> InventoryStore:
    """Load the store once per request from the SQL blob table."""
    if 'inventory_store' not in g:
        g.inventory_store = InventoryStore(
            SqlBlobStore(),
            sku_prefix=current_app.config.get('SKU_PREFIX', 'V254'),
            default_category=current_app.config.get('DEFAULT_CATEGORY', ''),
        ).load()
    return g.inventory_store


def get_users():
    return INITIAL_USERS
