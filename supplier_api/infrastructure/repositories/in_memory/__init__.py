"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .supplier import InMemorySupplierRepository, InMemorySupplierStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemorySupplierStore",
    "InMemorySupplierRepository",
    "InMemoryUserRepository",
]
