"""
类型化连接池模块
"""

from typing import Dict, Type

from ..connection_config import BackendKind
from .base import PooledConnection, TypedPool
from .postgres_connection import PostgresPool
from .mysql_connection import MySQLPool, parse_mysql_url
from .sqlite_connection import SQLitePool

# 每种数据库类型对应一个连接池实现，新增后端时必须在此登记
POOL_TYPES: Dict[BackendKind, Type[TypedPool]] = {
    BackendKind.POSTGRES: PostgresPool,
    BackendKind.MYSQL: MySQLPool,
    BackendKind.SQLITE: SQLitePool,
}


def pool_type_for(backend: BackendKind) -> Type[TypedPool]:
    """
    获取数据库类型对应的连接池类

    Raises:
        ValueError: 不支持的数据库类型
    """
    try:
        return POOL_TYPES[backend]
    except KeyError:
        raise ValueError(f"不支持的数据库类型: {backend}") from None


__all__ = [
    "PooledConnection",
    "TypedPool",
    "PostgresPool",
    "MySQLPool",
    "SQLitePool",
    "POOL_TYPES",
    "pool_type_for",
    "parse_mysql_url",
]
