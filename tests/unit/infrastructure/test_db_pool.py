"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close, reset)
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
"""

from unittest.mock import MagicMock, patch

import pytest

from supplier_api.infrastructure.db import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_creates_pool(self):
        from supplier_api.infrastructure.db.pool import init_pool, reset_pool

        reset_pool()

        with patch("supplier_api.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            assert MockPool.call_args.kwargs["min_size"] == 2
            assert result == mock_pool

        reset_pool()

    def test_init_pool_twice_raises_error(self):
        from supplier_api.infrastructure.db.pool import init_pool, reset_pool

        reset_pool()

        with patch("supplier_api.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=2)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=2)

        reset_pool()

    def test_get_pool_without_init_raises_error(self):
        from supplier_api.infrastructure.db.pool import get_pool, reset_pool

        reset_pool()

        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_pool_errors_are_database_errors(self):
        from supplier_api.crosscutting.exceptions import DatabaseError
        from supplier_api.infrastructure.db.pool import get_pool, reset_pool

        reset_pool()

        with pytest.raises(DatabaseError) as exc_info:
            get_pool()

        assert exc_info.value.error_id

    def test_close_pool_clears_singleton(self):
        from supplier_api.infrastructure.db.pool import (
            close_pool,
            get_pool,
            init_pool,
            reset_pool,
        )

        reset_pool()

        with patch("supplier_api.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            init_pool("postgresql://test", min_size=1, max_size=2)
            close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()

    def test_close_pool_is_idempotent(self):
        from supplier_api.infrastructure.db.pool import close_pool, reset_pool

        reset_pool()
        close_pool()
        close_pool()


@pytest.mark.unit
class TestEnsureSchema:
    def test_runs_all_statements_in_one_transaction(self):
        from supplier_api.infrastructure.db.schema import SCHEMA_STATEMENTS, ensure_schema

        pool = MagicMock()
        conn = pool.connection.return_value.__enter__.return_value

        ensure_schema(pool)

        conn.transaction.assert_called_once()
        assert conn.execute.call_count == len(SCHEMA_STATEMENTS)

    def test_failure_raises_database_error(self):
        from supplier_api.crosscutting.exceptions import DatabaseError
        from supplier_api.infrastructure.db.schema import ensure_schema

        pool = MagicMock()
        pool.connection.side_effect = RuntimeError("down")

        with pytest.raises(DatabaseError):
            ensure_schema(pool)
