"""Infra DB: pool + schema + errores tipados."""

from .errors import (
    DatabasePoolError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from .pool import close_pool, get_pool, init_pool, reset_pool
from .schema import ensure_schema

__all__ = [
    "init_pool",
    "get_pool",
    "close_pool",
    "reset_pool",
    "ensure_schema",
    "DatabasePoolError",
    "PoolAlreadyInitializedError",
    "PoolNotInitializedError",
]
