"""Common repositories."""

from app.repositories.common.cache import ExpiringCache, normalize_key

__all__ = ["ExpiringCache", "normalize_key"]
