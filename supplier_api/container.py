"""
===============================================================================
TARJETA CRC — supplier_api/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, servicio de identidad, casos de uso).
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - supplier_api.crosscutting.config.get_settings
  - supplier_api.domain.repositories.* (puertos)
  - supplier_api.infrastructure.repositories.* (implementaciones)
  - supplier_api.application.usecases.suppliers.* (casos de uso)
  - supplier_api.identity.identity_service.IdentityService

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)
  - Lazy singletons con lru_cache

Notas:
  - El repositorio de proveedores es POR REQUEST (unidad de trabajo):
    cada llamada a get_supplier_repository() devuelve una instancia nueva.
    Solo el store subyacente (in-memory) o el pool (Postgres) se comparten.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases.suppliers import (
    CreateSupplierUseCase,
    DeleteSupplierUseCase,
    GetSupplierUseCase,
    ListSuppliersUseCase,
    UpdateSupplierUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import SupplierRepository, UserRepository
from .identity.identity_service import IdentityService, LockoutPolicy
from .infrastructure.repositories import (
    InMemorySupplierRepository,
    InMemorySupplierStore,
    InMemoryUserRepository,
    PostgresSupplierRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """
    Regla:
      - app_env ∈ {"test", "testing", "ci"} => in-memory adapters.
    """
    return get_settings().is_test()


# =============================================================================
# Repositorios
# =============================================================================


@lru_cache(maxsize=1)
def get_in_memory_supplier_store() -> InMemorySupplierStore:
    """Store compartido por proceso (solo entorno de test)."""
    return InMemorySupplierStore()


def get_supplier_repository() -> SupplierRepository:
    """Unidad de trabajo nueva por request."""
    if _is_test_env():
        return InMemorySupplierRepository(get_in_memory_supplier_store())
    return PostgresSupplierRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


# =============================================================================
# Identidad
# =============================================================================


def get_lockout_policy() -> LockoutPolicy:
    settings = get_settings()
    return LockoutPolicy(
        max_failed_attempts=settings.lockout_max_failed_attempts,
        lockout_minutes=settings.lockout_minutes,
    )


def get_identity_service() -> IdentityService:
    return IdentityService(
        user_repository=get_user_repository(),
        lockout=get_lockout_policy(),
    )


# =============================================================================
# Casos de uso (factories por request)
# =============================================================================


def get_list_suppliers_use_case() -> ListSuppliersUseCase:
    return ListSuppliersUseCase(supplier_repository=get_supplier_repository())


def get_get_supplier_use_case() -> GetSupplierUseCase:
    return GetSupplierUseCase(supplier_repository=get_supplier_repository())


def get_create_supplier_use_case() -> CreateSupplierUseCase:
    return CreateSupplierUseCase(supplier_repository=get_supplier_repository())


def get_update_supplier_use_case() -> UpdateSupplierUseCase:
    return UpdateSupplierUseCase(supplier_repository=get_supplier_repository())


def get_delete_supplier_use_case() -> DeleteSupplierUseCase:
    return DeleteSupplierUseCase(supplier_repository=get_supplier_repository())


def reset_in_memory_state() -> None:
    """Vacía los adapters in-memory (tests)."""
    get_in_memory_supplier_store.cache_clear()
    get_user_repository.cache_clear()
