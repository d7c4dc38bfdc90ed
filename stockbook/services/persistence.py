"""
Blob persistence adapters

Both adapters expose the same two calls, ``load(key, fallback)`` and
``save(key, value)``. Values are JSON documents; nothing is versioned and
each save replaces the whole value for its key.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

PRODUCTS_KEY = 'products'
MOVEMENTS_KEY = 'movements'


class SqlBlobStore:
    """Stores JSON blobs in the ``blob_store`` table. Needs an app context."""

    def load(self, key: str, fallback: Any = None) -> Any:
        from stockbook.models.blob import KeyValueBlob

        raw = KeyValueBlob.get_value(key)
        if raw is None:
            return fallback
        return json.loads(raw)

    def save(self, key: str, value: Any) -> None:
        from stockbook.models.blob import KeyValueBlob

        KeyValueBlob.set_value(key, json.dumps(value))
        logger.debug("Saved blob %s", key)


class MemoryBlobStore:
    """Dict-backed adapter; keeps the encoded text so values round-trip as JSON."""

    def __init__(self, initial: Dict[str, Any] | None = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str, fallback: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return fallback
        return json.loads(raw)

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def __contains__(self, key: str) -> bool:
        return key in self._data
