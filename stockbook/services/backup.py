"""
Backup, restore and CSV export
"""
from __future__ import annotations

import csv
import json
import logging
from datetime import datetime, timezone
from io import StringIO
from typing import Any, Dict, List, Optional, Sequence, Tuple

from stockbook.models.inventory import Product, StockMovement
from stockbook.models.user import User

logger = logging.getLogger(__name__)

CSV_HEADERS = ['ID', 'SKU', 'Name', 'Category', 'Stock', 'Cost', 'Price', 'Supplier', 'Barcode']


class BackupError(Exception):
    pass


def build_backup(
    products: Sequence[Product],
    movements: Sequence[StockMovement],
    users: Sequence[User],
) -> Dict[str, Any]:
    return {
        'products': [p.to_dict() for p in products],
        'movements': [m.to_dict() for m in movements],
        'users': [u.to_dict() for u in users],
    }


def backup_filename(now_ms: int, prefix: str = 'backup_v254') -> str:
    return f'{prefix}_{int(now_ms)}.json'


def parse_backup(raw) -> Tuple[Optional[List[Product]], Optional[List[StockMovement]]]:
    """Decode a backup document.

    Returns ``(products, movements)``; either is ``None`` when the document
    does not carry that field, meaning the current collection stays as is.
    Raises ``BackupError`` when the text is not JSON, is not an object, or
    holds records that do not decode. Nothing is partially applied.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise BackupError(f'Invalid backup file: {e}') from e
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise BackupError(f'Invalid backup file: {e}') from e
    else:
        data = raw

    if not isinstance(data, dict):
        raise BackupError('Invalid backup file: expected a JSON object')

    products = movements = None
    try:
        if data.get('products') is not None:
            products = [Product.from_dict(p) for p in _as_list(data['products'], 'products')]
        if data.get('movements') is not None:
            movements = [StockMovement.from_dict(m) for m in _as_list(data['movements'], 'movements')]
    except (ValueError, TypeError, KeyError) as e:
        raise BackupError(f'Invalid backup file: {e}') from e

    logger.info(
        "Parsed backup: products=%s movements=%s",
        'unchanged' if products is None else len(products),
        'unchanged' if movements is None else len(movements),
    )
    return products, movements


def _as_list(value, field_name):
    if not isinstance(value, list):
        raise ValueError(f'"{field_name}" must be a list')
    return value


def _format_cell(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def export_csv(products: Sequence[Product]) -> str:
    """One row per product, fixed column order, ``\\n`` line endings."""
    si = StringIO()
    cw = csv.writer(si, lineterminator='\n')
    cw.writerow(CSV_HEADERS)
    for p in products:
        cw.writerow([_format_cell(v) for v in (
            p.id, p.sku, p.name, p.category, p.stock,
            p.cost_price, p.sell_price, p.supplier, p.barcode,
        )])
    return si.getvalue()


def csv_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"inventory_export_{now.strftime('%Y-%m-%d')}.csv"
