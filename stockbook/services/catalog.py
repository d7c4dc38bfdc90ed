"""
Catalog queries and product creation
"""
from __future__ import annotations

import logging
import math
import random
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from stockbook.models.inventory import Product
from stockbook.models.seed import now_ms
from stockbook.services.codes import generate_id, generate_sku

logger = logging.getLogger(__name__)

FILTER_MODES = ('all', 'low', 'out', 'expired')


class ProductValidationError(Exception):
    pass


def _matches_filter(product: Product, filter_mode: str, now: int) -> bool:
    if filter_mode == 'low':
        return product.is_low_stock
    if filter_mode == 'out':
        return product.is_out_of_stock
    if filter_mode == 'expired':
        return product.is_expired(now)
    return True


def filter_products(
    products: Sequence[Product],
    search_text: str = '',
    filter_mode: str = 'all',
    now: Optional[int] = None,
) -> List[Product]:
    """Inventory list query: text search AND stock-state filter.

    The search is a case-insensitive substring match on name, SKU or
    category. Unknown filter modes fall back to ``all``. Input order is kept.
    """
    now = now_ms() if now is None else now
    needle = (search_text or '').lower()
    results = []
    for p in products:
        matches_search = (
            needle in p.name.lower()
            or needle in p.sku.lower()
            or needle in p.category.lower()
        )
        if matches_search and _matches_filter(p, filter_mode, now):
            results.append(p)
    return results


def find_by_barcode(products: Iterable[Product], code: str) -> Optional[Product]:
    """First product carrying the scanned barcode. Barcodes are not unique."""
    return next((p for p in products if p.barcode == code), None)


def safe_number(value, default=0):
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else default
    if not isinstance(value, str):
        return default
    try:
        text = value.strip()
        number = float(text)
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() and '.' not in text else number


def safe_int(value, default=0) -> int:
    number = safe_number(value, default)
    try:
        return max(0, int(number))
    except (ValueError, TypeError, OverflowError):
        return default


def parse_expiry(value) -> Optional[int]:
    """Accept epoch ms or an ISO date/datetime string; blank means no expiry.

    Naive values are read as UTC, the way a browser parses ``YYYY-MM-DD``.
    """
    if value is None or value == '':
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise ProductValidationError(f'Invalid expiry date: {value}')
        return int(value)
    if not isinstance(value, str):
        raise ProductValidationError(f'Invalid expiry date: {value}')
    try:
        parsed = datetime.fromisoformat(str(value).strip())
    except ValueError:
        raise ProductValidationError(f'Invalid expiry date: {value}')
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def _clean_text(data, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ''
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ProductValidationError(f'Invalid value for {key}')
    return str(value).strip()


def build_product(
    data: Dict[str, Any],
    existing_skus: Iterable[str] = (),
    sku_prefix: str = 'V254',
    default_category: str = '',
    now: Optional[int] = None,
) -> Product:
    """Create a product from add-product form data.

    - ``name`` and a non-zero ``sellPrice`` are required.
    - ``sku`` is generated from the clock when not supplied.
    - Blank ``barcode``/``supplier`` become ``N/A``.
    - Opening stock is set directly; no movement is logged for it.
    """
    now = now_ms() if now is None else now
    name = _clean_text(data, 'name')
    sell_price = safe_number(data.get('sellPrice'))
    if not name or not sell_price:
        raise ProductValidationError('Name and Selling Price are required')
    cost_price = safe_number(data.get('costPrice'))
    if sell_price < 0 or cost_price < 0:
        raise ProductValidationError('Prices cannot be negative')

    sku = _clean_text(data, 'sku') or generate_sku(now, prefix=sku_prefix, existing=existing_skus)

    product = Product(
        id=generate_id(),
        sku=sku,
        name=name,
        barcode=_clean_text(data, 'barcode') or 'N/A',
        category=_clean_text(data, 'category') or default_category,
        supplier=_clean_text(data, 'supplier') or 'N/A',
        cost_price=cost_price,
        sell_price=sell_price,
        stock=safe_int(data.get('stock')),
        low_stock_threshold=safe_int(data.get('lowStockThreshold'), 5),
        expiry_date=parse_expiry(data.get('expiryDate')),
        image_path=_clean_text(data, 'imagePath') or f'https://picsum.photos/200/200?random={random.randint(0, 999)}',
    )
    logger.info("Built product %s (%s) with opening stock %s", product.sku, product.name, product.stock)
    return product
