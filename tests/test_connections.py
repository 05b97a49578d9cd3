import pytest

from multiconn.core import BackendKind, ConnectionConfig, CheckoutError
from multiconn.core.connections import (
    POOL_TYPES,
    PooledConnection,
    PostgresPool,
    SQLitePool,
    pool_type_for,
)


class FakeConnection:
    def __init__(self):
        self.closed = 0

    def close(self):
        self.closed += 1

    def cursor(self):
        return "cursor"


def test_every_backend_has_a_pool_type():
    assert set(POOL_TYPES) == set(BackendKind)
    for kind, pool_type in POOL_TYPES.items():
        assert pool_type.backend is kind
        assert pool_type_for(kind) is pool_type


def test_pool_rejects_config_of_other_backend():
    config = ConnectionConfig.new("x", BackendKind.SQLITE, "a.db", ":memory:", None, 1, None)
    with pytest.raises(ValueError):
        PostgresPool(config)


def test_checkout_before_connect_fails():
    config = ConnectionConfig.new("x", BackendKind.SQLITE, "a.db", ":memory:", None, 1, None)
    with pytest.raises(CheckoutError) as exc_info:
        SQLitePool(config).checkout()
    assert isinstance(exc_info.value.cause, ConnectionError)


def test_pooled_connection_releases_once():
    released = []
    raw = FakeConnection()
    conn = PooledConnection("x", BackendKind.MYSQL, raw, lambda: released.append(1))

    with conn:
        assert conn.cursor() == "cursor"
        assert "leased" in repr(conn)

    conn.close()
    assert raw.closed == 1
    assert released == [1]
    assert conn.released
    with pytest.raises(ConnectionError):
        conn.cursor()
