"""Common models - base classes and the cache entry."""

from app.models.common.base import BaseEntity
from app.models.common.cache import Entry

__all__ = [
    "BaseEntity",
    "Entry",
]
