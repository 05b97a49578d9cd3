"""
连接注册表
按名称管理多个数据库（PostgreSQL / MySQL / SQLite）及多租户 schema 的连接池
"""

from types import MappingProxyType
from typing import Dict, Any, Iterable, Iterator, List, Mapping, Optional
import logging

from ..config.settings import Settings, get_settings
from .connection_config import BackendKind, ConnectionConfig
from .connections import PooledConnection, TypedPool, pool_type_for
from .exceptions import (
    InvalidConnectionNameError,
    InvalidConnectionTypeError,
    RegistryClosedError,
)

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """
    连接注册表 - 名称到类型化连接池的映射

    特点：
    - 一次性批量构建，任一连接池创建失败则整体失败
    - 构建后只读，查询无需加锁
    - 按数据库类型获取连接，类型不匹配时报错
    - 支持 with 语句，退出时关闭所有连接池

    构建后不支持新增或删除连接；如需变更请重新构建。
    宿主程序若要在多线程中替换注册表，需要自行同步。
    """

    def __init__(self, pools: Optional[Mapping[str, TypedPool]] = None):
        """
        初始化连接注册表

        Args:
            pools: 已建立的连接池（通常通过 build() 创建）
        """
        self._pools: Mapping[str, TypedPool] = MappingProxyType(dict(pools or {}))
        self._closed = False

    @classmethod
    def build(
        cls,
        configs: Iterable[ConnectionConfig],
        settings: Optional[Settings] = None,
    ) -> "ConnectionRegistry":
        """
        按顺序为每个配置创建连接池

        同名配置后者覆盖前者（被覆盖的连接池会被关闭）。

        Args:
            configs: 连接配置序列
            settings: 连接池配置，默认读取环境变量

        Returns:
            ConnectionRegistry: 构建完成的注册表

        Raises:
            PoolBuildError: 任一连接池创建失败，已创建的连接池会被全部关闭
        """
        settings = settings or get_settings()
        pools: Dict[str, TypedPool] = {}
        memory_configs: List[str] = []

        try:
            for config in configs:
                if config.is_memory:
                    memory_configs.append(config.name)
                    if config.pool_size > 1:
                        logger.warning(
                            f"⚠️ {config.name} 使用 :memory:，池中每个连接都是独立的数据库"
                        )

                pool = pool_type_for(config.backend)(config).connect(settings)

                previous = pools.get(config.name)
                if previous is not None:
                    logger.warning(
                        f"⚠️ 连接名重复: {config.name}，"
                        f"{previous.backend} 配置被 {config.backend} 配置覆盖"
                    )
                    previous.disconnect()
                pools[config.name] = pool
        except Exception:
            for name, pool in pools.items():
                try:
                    pool.disconnect()
                except Exception as e:
                    logger.error(f"❌ {name} 关闭失败: {e}")
            raise

        if len(memory_configs) > 1:
            logger.warning(
                f"⚠️ 多个连接使用 :memory: ({', '.join(memory_configs)})，"
                "是否共享数据取决于驱动"
            )

        logger.info(f"✅ ConnectionRegistry 初始化完成 (连接数: {len(pools)})")
        return cls(pools)

    # ==================== 获取连接 ====================

    def _get_pool(self, name: str, backend: BackendKind) -> TypedPool:
        if self._closed:
            raise RegistryClosedError()

        pool = self._pools.get(name)
        if pool is None:
            raise InvalidConnectionNameError(backend, name)

        if pool.backend != backend:
            raise InvalidConnectionTypeError(backend, pool.backend)

        return pool

    def get_conn(self, name: str, backend: BackendKind) -> PooledConnection:
        """
        按名称和数据库类型借出连接

        Args:
            name: 连接名
            backend: 期望的数据库类型

        Returns:
            PooledConnection: 借出的连接，close() 或退出 with 时归还

        Raises:
            InvalidConnectionNameError: 连接名不存在
            InvalidConnectionTypeError: 连接不是该数据库类型
            CheckoutError: 连接池无法提供连接
        """
        return self._get_pool(name, backend).checkout()

    def get_pg_conn(self, name: str) -> PooledConnection:
        """获取 PostgreSQL 连接"""
        return self.get_conn(name, BackendKind.POSTGRES)

    def get_mysql_conn(self, name: str) -> PooledConnection:
        """获取 MySQL 连接"""
        return self.get_conn(name, BackendKind.MYSQL)

    def get_sqlite_conn(self, name: str) -> PooledConnection:
        """获取 SQLite 连接"""
        return self.get_conn(name, BackendKind.SQLITE)

    # ==================== 查询 ====================

    def names(self) -> List[str]:
        """所有连接名（按注册顺序）"""
        return list(self._pools)

    def backend_of(self, name: str) -> BackendKind:
        """
        获取连接名对应的数据库类型

        Raises:
            KeyError: 连接名不存在
        """
        return self._pools[name].backend

    def get_config(self, name: str) -> ConnectionConfig:
        """
        获取连接名对应的配置

        Raises:
            KeyError: 连接名不存在
        """
        return self._pools[name].config

    def __contains__(self, name: object) -> bool:
        return name in self._pools

    def __len__(self) -> int:
        return len(self._pools)

    def __iter__(self) -> Iterator[str]:
        return iter(self._pools)

    @property
    def closed(self) -> bool:
        return self._closed

    # ==================== 通用方法 ====================

    def health_check(self) -> Dict[str, Any]:
        """
        所有连接池健康检查（每个池借出一个连接执行 SELECT 1）

        Returns:
            Dict: 健康状态字典
        """
        if self._closed:
            raise RegistryClosedError()

        health = {}

        for name, pool in self._pools.items():
            try:
                pool.ping()
                health[name] = {"healthy": True, "backend": str(pool.backend)}
            except Exception as e:
                logger.warning(f"⚠️ {name} 健康检查失败: {e}")
                health[name] = {
                    "healthy": False,
                    "backend": str(pool.backend),
                    "error": str(e),
                }

        return health

    def get_stats(self) -> Dict[str, Any]:
        """
        获取所有连接池的统计信息

        Returns:
            Dict: 统计信息字典
        """
        stats = {
            "total_connections": len(self._pools),
            "closed": self._closed,
            "connections": {},
        }

        for name, pool in self._pools.items():
            stats["connections"][name] = pool.get_stats()

        return stats

    def close_all(self):
        """关闭所有连接池"""
        if self._closed:
            return

        logger.info("🔄 正在关闭所有连接池...")

        errors = []
        for name, pool in self._pools.items():
            try:
                pool.disconnect()
            except Exception as e:
                logger.error(f"❌ {name} 关闭失败: {e}")
                errors.append(e)

        self._closed = True
        logger.info("✅ 所有连接池已关闭")

        if errors:
            raise errors[0]

    def __enter__(self) -> "ConnectionRegistry":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_all()

    def __repr__(self) -> str:
        return f"<ConnectionRegistry {self.names()}>"


def build_registry(
    configs: Iterable[ConnectionConfig], settings: Optional[Settings] = None
) -> ConnectionRegistry:
    """
    构建连接注册表

    Args:
        configs: 连接配置序列
        settings: 连接池配置

    Returns:
        ConnectionRegistry: 连接注册表实例
    """
    return ConnectionRegistry.build(configs, settings)
