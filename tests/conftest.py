"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test => in-memory adapters)
  - Provide reusable fixtures (suppliers, repositories, users, tokens)
  - Reset process-wide in-memory state between tests

Collaborators:
  - pytest: Test framework
  - supplier_api.container: in-memory singletons
  - supplier_api.identity: users / tokens

Notes:
  - Environment must be set BEFORE importing supplier_api (settings are cached)
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from pathlib import Path
from uuid import uuid4

import pytest

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_JSON", "false")

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from supplier_api.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None
app_config.get_settings.cache_clear()

from supplier_api import container  # noqa: E402
from supplier_api.domain.entities import Supplier  # noqa: E402
from supplier_api.identity.auth_users import AuthSettings  # noqa: E402
from supplier_api.infrastructure.repositories import (  # noqa: E402
    InMemorySupplierRepository,
    InMemorySupplierStore,
    InMemoryUserRepository,
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (require PostgreSQL)"
    )


@pytest.fixture(autouse=True)
def _reset_in_memory_state():
    """R: Each test starts with an empty store and user table."""
    container.reset_in_memory_state()
    yield
    container.reset_in_memory_state()


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def acme() -> Supplier:
    return Supplier(id=uuid4(), name="Acme", document="12345", is_active=True)


@pytest.fixture
def supplier_store() -> InMemorySupplierStore:
    return InMemorySupplierStore()


@pytest.fixture
def supplier_repository(supplier_store) -> InMemorySupplierRepository:
    return InMemorySupplierRepository(supplier_store)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(
        jwt_secret="test-secret-with-enough-length-0123456789",
        jwt_issuer="supplier-api-tests",
        jwt_audience="https://tests.local",
        jwt_expiration_hours=2,
    )
