"""
PostgreSQL 连接池（psycopg2 + DBUtils）
"""

from typing import Dict, Any

from dbutils.pooled_db import PooledDB

from ..connection_config import BackendKind
from .base import TypedPool


class PostgresPool(TypedPool):
    """PostgreSQL 连接池，search_path 由连接字符串的 options 参数注入"""

    backend = BackendKind.POSTGRES

    def create_pool(self, url: str, pool_kwargs: Dict[str, Any]) -> PooledDB:
        # 仅在使用 PostgreSQL 时才需要安装 psycopg2
        import psycopg2

        return PooledDB(creator=psycopg2, dsn=url, **pool_kwargs)
