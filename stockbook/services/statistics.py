"""
Dashboard statistics

Everything here is a pure function over the product and movement
collections. Nothing is cached; callers recompute on every read.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from stockbook.models.inventory import BestSeller, DashboardStats, MovementType, Product, StockMovement
from stockbook.models.seed import now_ms


def start_of_day_ms(now: int) -> int:
    """Epoch ms of local midnight on the day containing ``now``."""
    local = datetime.fromtimestamp(now / 1000)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp() * 1000)


def compute_dashboard_stats(
    products: Sequence[Product],
    movements: Iterable[StockMovement],
    now: Optional[int] = None,
) -> DashboardStats:
    now = now_ms() if now is None else now
    today = start_of_day_ms(now)
    return DashboardStats(
        total_products=sum(p.stock for p in products),
        low_stock_count=sum(1 for p in products if p.is_low_stock),
        expired_count=sum(1 for p in products if p.is_expired(now)),
        total_value=sum(p.stock * p.cost_price for p in products),
        movements_today=sum(1 for m in movements if m.timestamp >= today),
    )


def compute_best_sellers(movements: Iterable[StockMovement], top_n: int = 3) -> List[BestSeller]:
    """Rank products by total OUT quantity.

    Sales are grouped by the product name captured on each movement, not by
    product id, so a renamed product shows up under both names. Ties keep
    the order in which names were first seen.
    """
    sold: Dict[str, int] = {}
    for m in movements:
        if m.type != MovementType.OUT:
            continue
        sold[m.product_name] = sold.get(m.product_name, 0) + m.quantity

    ranked = sorted(sold.items(), key=lambda item: item[1], reverse=True)
    return [BestSeller(name=name, qty=qty) for name, qty in ranked[:max(top_n, 0)]]
