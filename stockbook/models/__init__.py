"""
Models package: the key-value blob table and the inventory domain types
"""
from stockbook.models.base import BaseModel

from stockbook.models.blob import KeyValueBlob
from stockbook.models.inventory import MovementType, Product, StockMovement, DashboardStats, BestSeller
from stockbook.models.user import User, UserRole

__all__ = [
    'BaseModel', 'KeyValueBlob',
    'MovementType', 'Product', 'StockMovement', 'DashboardStats', 'BestSeller',
    'User', 'UserRole',
]
