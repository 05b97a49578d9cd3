import sqlite3

import pytest
from dbutils.pooled_db import PooledDB

from multiconn.config.settings import Settings
from multiconn.core import BackendKind, ConnectionConfig
from multiconn.core.connections import MySQLPool, PostgresPool


@pytest.fixture()
def settings():
    s = Settings()
    s.pool_min_cached = 1
    s.pool_max_cached = 0
    s.pool_blocking = False
    s.pool_max_usage = 0
    s.pool_ping = 1
    return s


@pytest.fixture()
def sqlite_config(tmp_path):
    def make(name, database_name=None, pool_size=2, host_url=None, **kw):
        return ConnectionConfig.new(
            name,
            BackendKind.SQLITE,
            database_name or f"{name}.db",
            host_url if host_url is not None else f"{tmp_path}/",
            kw.get("schema"),
            pool_size,
            kw.get("options"),
        )
    return make


@pytest.fixture()
def server_urls(monkeypatch):
    """Postgres/MySQL pools backed by in-memory sqlite; records the URL each pool was built with."""
    seen = {}

    def _sqlite_backed_pool(self, url, pool_kwargs):
        seen[self.name] = url
        return PooledDB(
            creator=sqlite3, database=":memory:", check_same_thread=False, **pool_kwargs
        )

    monkeypatch.setattr(PostgresPool, "create_pool", _sqlite_backed_pool)
    monkeypatch.setattr(MySQLPool, "create_pool", _sqlite_backed_pool)
    return seen
