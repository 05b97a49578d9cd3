"""
类型化连接池抽象基类
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Callable, ClassVar, Optional
from datetime import datetime
import logging
import threading

from dbutils.pooled_db import PooledDB, TooManyConnections

from ...config.settings import Settings
from ..connection_config import BackendKind, ConnectionConfig
from ..exceptions import CheckoutError, PoolBuildError
from ...utils.url_util import mask_url

logger = logging.getLogger(__name__)


class PooledConnection:
    """
    从连接池借出的连接

    close() 时归还给连接池，支持 with 语句，保证任何退出路径都会归还。
    其余属性（cursor/commit/rollback 等）直接转发给底层连接。
    """

    def __init__(
        self,
        name: str,
        backend: BackendKind,
        connection: Any,
        on_release: Optional[Callable[[], None]] = None,
    ):
        self.name = name
        self.backend = backend
        self._connection = connection
        self._on_release = on_release
        self._released = False

    @property
    def released(self) -> bool:
        """是否已归还"""
        return self._released

    @property
    def raw(self) -> Any:
        """底层 DB-API 连接"""
        if self._released:
            raise ConnectionError(f"连接 {self.name} 已归还连接池")
        return self._connection

    def close(self):
        """归还连接（重复调用无副作用）"""
        if self._released:
            return
        self._released = True
        try:
            self._connection.close()
        finally:
            self._connection = None
            if self._on_release:
                self._on_release()

    def __getattr__(self, item: str) -> Any:
        if item.startswith("_"):
            raise AttributeError(item)
        return getattr(self.raw, item)

    def __enter__(self) -> "PooledConnection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        state = "released" if self._released else "leased"
        return f"<PooledConnection {self.name} ({self.backend}) {state}>"


class TypedPool(ABC):
    """
    绑定到单一数据库类型的连接池

    每个子类对应一种 BackendKind，并负责用该后端的驱动创建 PooledDB。
    """

    backend: ClassVar[BackendKind]

    def __init__(self, config: ConnectionConfig):
        """
        初始化连接池包装

        Args:
            config: 连接配置，其 backend 必须与本类的 backend 一致
        """
        if config.backend != self.backend:
            raise ValueError(
                f"{self.__class__.__name__} 只接受 {self.backend} 配置，收到 {config.backend}"
            )

        self.config = config
        self.name = config.name
        self._pool: Optional[PooledDB] = None
        self._connection_time: Optional[datetime] = None
        self._checked_out = 0
        self._lock = threading.Lock()

    @abstractmethod
    def create_pool(self, url: str, pool_kwargs: Dict[str, Any]) -> PooledDB:
        """
        用后端驱动创建 PooledDB

        Args:
            url: conn_url() 生成的连接字符串
            pool_kwargs: 连接池通用参数（maxconnections 等）

        Returns:
            PooledDB: 连接池
        """
        pass

    def connect(self, settings: Settings) -> "TypedPool":
        """
        建立连接池

        Raises:
            PoolBuildError: 连接池创建失败
        """
        if self.config.pool_size < 1:
            error = ValueError(f"pool_size 必须为正整数，收到 {self.config.pool_size}")
            logger.error(f"❌ {self.backend} 连接池 {self.name} 创建失败: {error}")
            raise PoolBuildError(self.backend, error)

        url = self.config.conn_url()
        logger.info(
            f"🔄 正在创建 {self.backend} 连接池: {self.name} -> {mask_url(url)}"
        )

        try:
            self._pool = self.create_pool(url, settings.pool_kwargs(self.config.pool_size))
        except Exception as e:
            logger.error(f"❌ {self.backend} 连接池 {self.name} 创建失败: {e}")
            raise PoolBuildError(self.backend, e) from e

        self._connection_time = datetime.now()
        logger.info(
            f"✅ {self.backend} 连接池 {self.name} 创建成功 (池大小: {self.config.pool_size})"
        )
        return self

    def checkout(self) -> PooledConnection:
        """
        从连接池借出一个连接（是否阻塞取决于连接池配置）

        Returns:
            PooledConnection: 借出的连接

        Raises:
            CheckoutError: 获取连接失败
        """
        if self._pool is None:
            raise CheckoutError(
                self.backend, self.name, ConnectionError("连接池未初始化")
            )

        try:
            connection = self._pool.connection(shareable=False)
        except Exception as e:
            logger.error(f"❌ {self.backend} 连接 {self.name} 获取失败: {e}")
            raise CheckoutError(self.backend, self.name, e) from e

        with self._lock:
            self._checked_out += 1

        return PooledConnection(self.name, self.backend, connection, self._release)

    def _release(self):
        with self._lock:
            self._checked_out -= 1

    def try_checkout(self) -> PooledConnection:
        """
        不阻塞地借出连接，连接池已满时立即失败

        Raises:
            CheckoutError: 连接池已满或获取连接失败
        """
        pool = self._pool
        if pool is None:
            return self.checkout()

        # PooledDB 的锁可重入，持锁期间计数不会变化
        with pool._lock:
            if pool._maxconnections and pool._connections >= pool._maxconnections:
                raise CheckoutError(
                    self.backend, self.name, TooManyConnections("连接池已满")
                )
            return self.checkout()

    def ping(self):
        """
        执行 SELECT 1 检查连接

        Raises:
            CheckoutError: 获取连接失败
            Exception: 驱动执行查询时的异常
        """
        with self.try_checkout() as connection:
            cursor = connection.cursor()
            try:
                cursor.execute("SELECT 1")
                cursor.fetchone()
            finally:
                cursor.close()

    def disconnect(self):
        """关闭连接池，释放所有空闲连接"""
        if self._pool is None:
            return

        pool, self._pool = self._pool, None
        pool.close()
        logger.info(f"✅ {self.backend} 连接池 {self.name} 已关闭")

    @property
    def connected(self) -> bool:
        """连接池是否已建立"""
        return self._pool is not None

    @property
    def checked_out(self) -> int:
        """当前借出的连接数"""
        return self._checked_out

    def get_stats(self) -> Dict[str, Any]:
        """
        获取连接池统计信息

        Returns:
            Dict: 统计信息
        """
        return {
            "backend": str(self.backend),
            "connected": self.connected,
            "connection_time": (
                self._connection_time.isoformat() if self._connection_time else None
            ),
            "pool_size": self.config.pool_size,
            "checked_out": self.checked_out,
            "url": mask_url(self.config.conn_url()),
        }
