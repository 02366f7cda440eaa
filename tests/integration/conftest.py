"""
Integration test configuration.

Tests here need a disposable PostgreSQL database (TEST_DATABASE_URL) and
RUN_INTEGRATION=1; each test module skips itself otherwise. Tables are
truncated before every test.
"""

import os

import pytest
from psycopg_pool import ConnectionPool

from supplier_api.infrastructure.db.schema import ensure_schema


@pytest.fixture(scope="session")
def pg_pool():
    pool = ConnectionPool(
        conninfo=os.environ["TEST_DATABASE_URL"], min_size=1, max_size=2, open=True
    )
    ensure_schema(pool)
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def _clean_tables(pg_pool):
    with pg_pool.connection() as conn:
        conn.execute("TRUNCATE suppliers, user_claims, users")
    yield
