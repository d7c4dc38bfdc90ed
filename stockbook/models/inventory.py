from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


class MovementType(str, Enum):
    IN = "IN"
    OUT = "OUT"
    ADJUST = "ADJUST"  # reserved, never produced by the ledger


def _require(data: Dict[str, Any], *keys: str) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object, got {type(data).__name__}")
    missing = [k for k in keys if k not in data]
    if missing:
        raise ValueError(f"Missing field(s): {', '.join(missing)}")


def _text(data: Dict[str, Any], key: str, default: Optional[str] = None) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f'"{key}" must be a string')
    return value


def _number(data: Dict[str, Any], key: str, default: float = 0) -> float:
    """Numeric field; numeric strings are coerced, anything else is rejected."""
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f'"{key}" must be a number')
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise ValueError(f'"{key}" must be a number')
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f'"{key}" must be a number')
    return value


def _whole(data: Dict[str, Any], key: str, default: int = 0) -> int:
    return int(_number(data, key, default))


def _timestamp(data: Dict[str, Any], key: str) -> Optional[int]:
    """Epoch milliseconds or ``None``; date strings are not accepted here."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f'"{key}" must be epoch milliseconds or null')
    return int(value)


@dataclass
class Product:
    """A catalog item. ``stock`` is only changed through the stock ledger."""

    id: str
    sku: str
    name: str
    barcode: str = "N/A"
    category: str = ""
    supplier: str = "N/A"
    cost_price: float = 0
    sell_price: float = 0
    stock: int = 0
    low_stock_threshold: int = 5
    expiry_date: Optional[int] = None  # epoch milliseconds
    image_path: Optional[str] = None

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.low_stock_threshold

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock == 0

    def is_expired(self, now_ms: int) -> bool:
        return self.expiry_date is not None and self.expiry_date < now_ms

    def with_stock(self, stock: int) -> "Product":
        return replace(self, stock=stock)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "sku": self.sku,
            "name": self.name,
            "barcode": self.barcode,
            "category": self.category,
            "supplier": self.supplier,
            "costPrice": self.cost_price,
            "sellPrice": self.sell_price,
            "stock": self.stock,
            "lowStockThreshold": self.low_stock_threshold,
            "expiryDate": self.expiry_date,
        }
        if self.image_path is not None:
            data["imagePath"] = self.image_path
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        _require(data, "id", "sku", "name", "stock")
        image_path = data.get("imagePath")
        if image_path is not None and not isinstance(image_path, str):
            raise ValueError('"imagePath" must be a string')
        return cls(
            id=_text(data, "id"),
            sku=_text(data, "sku"),
            name=_text(data, "name"),
            barcode=_text(data, "barcode", "N/A"),
            category=_text(data, "category", ""),
            supplier=_text(data, "supplier", "N/A"),
            cost_price=_number(data, "costPrice"),
            sell_price=_number(data, "sellPrice"),
            stock=_whole(data, "stock"),
            low_stock_threshold=_whole(data, "lowStockThreshold"),
            expiry_date=_timestamp(data, "expiryDate"),
            image_path=image_path,
        )

    def __repr__(self) -> str:
        return f"<Product {self.name} (stock={self.stock})>"


@dataclass(frozen=True)
class StockMovement:
    id: str
    product_id: str
    product_name: str  # captured at movement time
    type: MovementType
    quantity: int  # always positive, as requested
    balance_after: int
    user_id: str
    reason: str
    timestamp: int  # epoch milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "productId": self.product_id,
            "productName": self.product_name,
            "type": self.type.value,
            "quantity": self.quantity,
            "balanceAfter": self.balance_after,
            "userId": self.user_id,
            "reason": self.reason,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StockMovement":
        _require(data, "id", "productId", "productName", "type", "quantity",
                 "balanceAfter", "userId", "timestamp")
        return cls(
            id=_text(data, "id"),
            product_id=_text(data, "productId"),
            product_name=_text(data, "productName"),
            type=MovementType(data["type"]),
            quantity=_whole(data, "quantity"),
            balance_after=_whole(data, "balanceAfter"),
            user_id=_text(data, "userId"),
            reason=_text(data, "reason", ""),
            timestamp=_whole(data, "timestamp"),
        )

    def __repr__(self) -> str:
        return f"<StockMovement {self.type.value} {self.quantity} {self.product_name}>"


@dataclass(frozen=True)
class DashboardStats:
    total_products: int  # units on hand, not SKU count
    low_stock_count: int
    expired_count: int
    total_value: float
    movements_today: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalProducts": self.total_products,
            "lowStockCount": self.low_stock_count,
            "expiredCount": self.expired_count,
            "totalValue": self.total_value,
            "movementsToday": self.movements_today,
        }


@dataclass(frozen=True)
class BestSeller:
    name: str
    qty: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "qty": self.qty}

