"""Shared base class for all declarative models.

Provides a permissive constructor that accepts arbitrary keyword arguments
so that clients can instantiate models using column names without
static type checker complaints.
"""
from typing import Any

from stockbook.extensions import db


class BaseModel(db.Model):
    __abstract__ = True
    # permit legacy or purely-typing annotations without ``Mapped``
    __allow_unmapped__ = True

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
