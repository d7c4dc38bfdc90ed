"""
Inventory store: the owned application state

Holds the product and movement collections, exposes the state transitions
(add product, apply movement, restore backup) and persists the collections
through the injected blob adapter after every transition.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from stockbook.models.inventory import BestSeller, DashboardStats, Product, StockMovement
from stockbook.models.seed import initial_movements, initial_products
from stockbook.models.user import User
from stockbook.services import catalog, statistics, stock
from stockbook.services.backup import parse_backup
from stockbook.services.persistence import MOVEMENTS_KEY, PRODUCTS_KEY

logger = logging.getLogger(__name__)


class InventoryStore:
    """
    Args:
        persistence: adapter with ``load(key, fallback)`` and ``save(key, value)``
        seed_products / seed_movements: factories for the fallback collections
            used when the adapter holds nothing yet
    """

    def __init__(
        self,
        persistence,
        seed_products: Callable[[], List[Product]] = initial_products,
        seed_movements: Callable[[], List[StockMovement]] = initial_movements,
        sku_prefix: str = 'V254',
        default_category: str = '',
    ):
        self.persistence = persistence
        self.seed_products = seed_products
        self.seed_movements = seed_movements
        self.sku_prefix = sku_prefix
        self.default_category = default_category
        self.products: List[Product] = []
        self.movements: List[StockMovement] = []  # most recent first

    def load(self) -> "InventoryStore":
        """Read both collections; missing ones are seeded and written back."""
        stored = self.persistence.load(PRODUCTS_KEY, None)
        if stored is None:
            self.products = list(self.seed_products())
            self._save_products()
            logger.info("Seeded %s products", len(self.products))
        else:
            self.products = [Product.from_dict(p) for p in stored]

        stored = self.persistence.load(MOVEMENTS_KEY, None)
        if stored is None:
            self.movements = list(self.seed_movements())
            self._save_movements()
            logger.info("Seeded %s movements", len(self.movements))
        else:
            self.movements = [StockMovement.from_dict(m) for m in stored]
        return self

    def _save_products(self) -> None:
        self.persistence.save(PRODUCTS_KEY, [p.to_dict() for p in self.products])

    def _save_movements(self) -> None:
        self.persistence.save(MOVEMENTS_KEY, [m.to_dict() for m in self.movements])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def find_by_barcode(self, code: str) -> Optional[Product]:
        return catalog.find_by_barcode(self.products, code)

    def filter_products(self, search_text: str = '', filter_mode: str = 'all', now: Optional[int] = None) -> List[Product]:
        return catalog.filter_products(self.products, search_text, filter_mode, now=now)

    def movements_for(self, product_id: str) -> List[StockMovement]:
        return [m for m in self.movements if m.product_id == product_id]

    def stats(self, now: Optional[int] = None) -> DashboardStats:
        return statistics.compute_dashboard_stats(self.products, self.movements, now=now)

    def best_sellers(self, top_n: int = 3) -> List[BestSeller]:
        return statistics.compute_best_sellers(self.movements, top_n=top_n)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def add_product(self, data: Dict[str, Any], now: Optional[int] = None) -> Product:
        product = catalog.build_product(
            data,
            existing_skus=[p.sku for p in self.products],
            sku_prefix=self.sku_prefix,
            default_category=self.default_category,
            now=now,
        )
        self.products.append(product)
        self._save_products()
        logger.info("Added product %s (%s)", product.sku, product.id)
        return product

    def apply_movement(
        self,
        product_id: str,
        quantity: Any,
        movement_type: Any,
        reason: str,
        user: Optional[User],
        now: Optional[int] = None,
    ) -> Optional[StockMovement]:
        """Apply a stock IN/OUT; returns ``None`` when the input was dropped."""
        result = stock.apply_movement(self.get_product(product_id), quantity, movement_type, reason, user, now=now)
        if result is None:
            logger.debug("Dropped stock movement for product=%s qty=%r type=%r", product_id, quantity, movement_type)
            return None

        updated, movement = result
        self.products = [updated if p.id == updated.id else p for p in self.products]
        self.movements.insert(0, movement)
        self._save_products()
        self._save_movements()
        logger.info(
            "Stock %s %s x%s by %s -> %s",
            movement.type.value, updated.sku, movement.quantity, movement.user_id, movement.balance_after,
        )
        return movement

    def restore_backup(self, raw) -> None:
        """Replace the collections present in the backup; raises ``BackupError``."""
        products, movements = parse_backup(raw)
        if products is not None:
            self.products = products
            self._save_products()
        if movements is not None:
            self.movements = movements
            self._save_movements()
        logger.info("Backup restored")
