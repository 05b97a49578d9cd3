"""
SQLite 连接池（sqlite3 + DBUtils）
"""

import sqlite3
from typing import Dict, Any

from dbutils.pooled_db import PooledDB

from ..connection_config import BackendKind
from .base import TypedPool


class SQLitePool(TypedPool):
    """
    SQLite 连接池

    注意: ":memory:" 的每个物理连接都是独立的数据库，
    需要共享内存数据的调用方应使用 pool_size=1 或 file: URI 共享缓存。
    """

    backend = BackendKind.SQLITE

    def create_pool(self, url: str, pool_kwargs: Dict[str, Any]) -> PooledDB:
        return PooledDB(
            creator=sqlite3,
            database=url,
            # 连接会在不同线程间借出
            check_same_thread=False,
            uri=url.startswith("file:"),
            **pool_kwargs,
        )
