"""
连接配置 - 描述一个命名的数据库连接目标
"""

from enum import Enum
from typing import Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from ..utils.url_util import mask_url

# SQLite 内存数据库标记
SQLITE_MEMORY = ":memory:"

# PostgreSQL search_path 前缀（空格和等号已转义）及默认回退 schema
PG_SEARCH_PATH_PREFIX = "options=-c%20search_path%3D"
PG_DEFAULT_SEARCH_PATH = "$user,public"


class BackendKind(str, Enum):
    """支持的数据库类型"""

    POSTGRES = "Postgres"
    MYSQL = "MySQL"
    SQLITE = "SQLite"

    def __str__(self) -> str:
        return self.value


class ConnectionConfig(BaseModel):
    """
    单个命名连接的配置（不可变）

    构造时不做任何校验，错误的 URL 只会在创建连接池时暴露。
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    backend: BackendKind
    database_name: str
    host_url: str
    schema_name: Optional[str] = Field(default=None, alias="schema")
    pool_size: int = 10
    options: Optional[str] = None

    @classmethod
    def new(
        cls,
        name: str,
        backend: BackendKind,
        database_name: str,
        host_url: str,
        schema: Optional[str] = None,
        pool_size: int = 10,
        options: Optional[str] = None,
    ) -> "ConnectionConfig":
        """按位置参数创建配置"""
        return cls(
            name=name,
            backend=backend,
            database_name=database_name,
            host_url=host_url,
            schema_name=schema,
            pool_size=pool_size,
            options=options,
        )

    def conn_url(self) -> str:
        """
        生成对应后端的连接字符串（纯函数，无 I/O）

        Returns:
            str: 连接字符串

        Raises:
            ValueError: 不支持的数据库类型
        """
        if self.backend == BackendKind.POSTGRES:
            return self._pg_conn_url()
        elif self.backend == BackendKind.MYSQL:
            return self._mysql_conn_url()
        elif self.backend == BackendKind.SQLITE:
            return self._sqlite_conn_url()
        else:
            raise ValueError(f"不支持的数据库类型: {self.backend}")

    def _pg_conn_url(self) -> str:
        # 租户 schema 排在默认 search_path 之前
        search_path = PG_DEFAULT_SEARCH_PATH
        if self.schema_name:
            search_path = f"{quote(self.schema_name, safe='')},{search_path}"

        query = f"{PG_SEARCH_PATH_PREFIX}{search_path}"
        if self.options:
            query = f"{self.options}&{query}"

        return f"{self.host_url}/{self.database_name}?{query}"

    def _mysql_conn_url(self) -> str:
        # mysql 中 schema 与 database 是同一概念
        if self.options:
            return f"{self.host_url}/{self.database_name}?{self.options}"

        return f"{self.host_url}/{self.database_name}"

    def _sqlite_conn_url(self) -> str:
        # 文件路径、file: URI 或 :memory:
        if self.host_url == SQLITE_MEMORY:
            return self.host_url

        return f"{self.host_url}{self.database_name}"

    @property
    def is_memory(self) -> bool:
        """是否为 SQLite 内存数据库"""
        return self.backend == BackendKind.SQLITE and self.host_url == SQLITE_MEMORY

    def __str__(self) -> str:
        return (
            "connection config\n"
            f"name : {self.name}\n"
            f"database engine : {self.backend}\n"
            f"URL: {mask_url(self.host_url)}\n"
            f"schema: {self.schema_name}\n"
            f"connection count: {self.pool_size}"
        )
