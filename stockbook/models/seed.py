"""
Seed data used when the blob store holds no collections yet
"""
from __future__ import annotations

import time
from typing import List, Optional

from stockbook.models.inventory import MovementType, Product, StockMovement
from stockbook.models.user import User, UserRole

DAY_MS = 86400000
HOUR_MS = 3600000

INITIAL_USERS: List[User] = [
    User(id='u1', name='Admin User', email='admin@v254.com', role=UserRole.ADMIN),
    User(id='u2', name='Staff Member', email='staff@v254.com', role=UserRole.STAFF),
]


def now_ms() -> int:
    return int(time.time() * 1000)


def initial_products(now: Optional[int] = None) -> List[Product]:
    now = now_ms() if now is None else now
    return [
        Product(
            id='p1',
            sku='V254-001',
            name='Silicone Bullet Vibrator',
            barcode='123456789',
            category='Vibrators',
            supplier='Global Imports Ltd',
            cost_price=1500,
            sell_price=3000,
            stock=42,
            low_stock_threshold=10,
            expiry_date=None,
            image_path='https://picsum.photos/200/200?random=1',
        ),
        Product(
            id='p2',
            sku='V254-002',
            name='Rabbit Dual Stimulator',
            barcode='987654321',
            category='Vibrators',
            supplier='AdultToy Co',
            cost_price=2500,
            sell_price=5500,
            stock=4,
            low_stock_threshold=5,
            expiry_date=None,
            image_path='https://picsum.photos/200/200?random=2',
        ),
        Product(
            id='p3',
            sku='V254-003',
            name='Luxury Massage Oil',
            barcode='456123789',
            category='Accessories',
            supplier='Local Wellness',
            cost_price=800,
            sell_price=1800,
            stock=25,
            low_stock_threshold=10,
            expiry_date=now + DAY_MS * 30,
            image_path='https://picsum.photos/200/200?random=3',
        ),
    ]


def initial_movements(now: Optional[int] = None) -> List[StockMovement]:
    """Most recent first, like the live movement log."""
    now = now_ms() if now is None else now
    return [
        StockMovement(
            id='m2',
            product_id='p1',
            product_name='Silicone Bullet Vibrator',
            type=MovementType.OUT,
            quantity=8,
            balance_after=42,
            user_id='u2',
            reason='Sale #1024',
            timestamp=now - HOUR_MS,
        ),
        StockMovement(
            id='m1',
            product_id='p1',
            product_name='Silicone Bullet Vibrator',
            type=MovementType.IN,
            quantity=50,
            balance_after=50,
            user_id='u1',
            reason='Initial Import',
            timestamp=now - DAY_MS,
        ),
    ]
