"""
核心模块 - 连接配置与连接注册表
"""

from .connection_config import BackendKind, ConnectionConfig
from .connection_registry import ConnectionRegistry, build_registry
from .connections import PooledConnection, TypedPool
from .exceptions import (
    RegistryError,
    PoolBuildError,
    InvalidConnectionNameError,
    InvalidConnectionTypeError,
    CheckoutError,
    RegistryClosedError,
)

__all__ = [
    "BackendKind",
    "ConnectionConfig",
    "ConnectionRegistry",
    "build_registry",
    "PooledConnection",
    "TypedPool",
    "RegistryError",
    "PoolBuildError",
    "InvalidConnectionNameError",
    "InvalidConnectionTypeError",
    "CheckoutError",
    "RegistryClosedError",
]
