"""
============================================================
TARJETA CRC
============================================================
Class: supplier_api.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.
- Mantener una API estable para el container (composition root).

Collaborators:
- Repositorios Postgres (SQL crudo)
- Repositorios InMemory (testing / entorno local)
============================================================
"""

# ---------------------------
# In-memory implementations
# No persisten datos tras reiniciar la app.
# ---------------------------
from .in_memory import (
    InMemorySupplierRepository,
    InMemorySupplierStore,
    InMemoryUserRepository,
)

# ---------------------------
# Postgres implementations
# ---------------------------
from .postgres import PostgresSupplierRepository, PostgresUserRepository

__all__ = [
    # Postgres
    "PostgresSupplierRepository",
    "PostgresUserRepository",
    # In-memory
    "InMemorySupplierStore",
    "InMemorySupplierRepository",
    "InMemoryUserRepository",
]
