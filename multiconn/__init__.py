"""
multiconn - 多数据库、多 schema 的命名连接池注册表
"""

from .core import (
    BackendKind,
    ConnectionConfig,
    ConnectionRegistry,
    build_registry,
    PooledConnection,
    RegistryError,
    PoolBuildError,
    InvalidConnectionNameError,
    InvalidConnectionTypeError,
    CheckoutError,
    RegistryClosedError,
)

__version__ = "0.1.0"

__all__ = [
    "BackendKind",
    "ConnectionConfig",
    "ConnectionRegistry",
    "build_registry",
    "PooledConnection",
    "RegistryError",
    "PoolBuildError",
    "InvalidConnectionNameError",
    "InvalidConnectionTypeError",
    "CheckoutError",
    "RegistryClosedError",
]
