from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from stockbook.models.inventory import MovementType, Product, StockMovement
from stockbook.models.seed import now_ms
from stockbook.models.user import User
from stockbook.services.codes import generate_id

logger = logging.getLogger(__name__)


def coerce_quantity(value: Any) -> Optional[int]:
    """Return ``value`` as a positive int, or ``None`` if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int) or value <= 0:
        return None
    return value


def apply_movement(
    product: Optional[Product],
    quantity: Any,
    movement_type: Any,
    reason: str,
    acting_user: Optional[User],
    now: Optional[int] = None,
) -> Optional[Tuple[Product, StockMovement]]:
    """Apply a stock IN/OUT to ``product`` and build the movement record.

    Invalid input is dropped: a missing product or user, a quantity that is
    not a positive integer, or a type other than IN/OUT all return ``None``.

    OUT never drives stock below zero. The movement keeps the requested
    quantity even when the balance was clamped, so ``balance_after`` is the
    authoritative figure.
    """
    if product is None or acting_user is None:
        return None

    qty = coerce_quantity(quantity)
    if qty is None:
        return None

    try:
        movement_type = MovementType(movement_type)
    except ValueError:
        return None

    if movement_type == MovementType.IN:
        new_stock = product.stock + qty
    elif movement_type == MovementType.OUT:
        new_stock = max(0, product.stock - qty)
        if product.stock < qty:
            logger.warning(
                "Stock-out of %s for %s clamped at zero (had %s)",
                qty, product.sku, product.stock,
            )
    else:
        return None

    updated = product.with_stock(new_stock)
    movement = StockMovement(
        id=generate_id(),
        product_id=updated.id,
        product_name=updated.name,
        type=movement_type,
        quantity=qty,
        balance_after=new_stock,
        user_id=acting_user.id,
        reason=reason or "",
        timestamp=now_ms() if now is None else now,
    )
    return updated, movement
