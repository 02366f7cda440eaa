"""
PostgreSQL Repository Implementations.

Raw parameterized SQL over psycopg 3 + psycopg_pool.
"""

from .supplier import PostgresSupplierRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresSupplierRepository",
    "PostgresUserRepository",
]
