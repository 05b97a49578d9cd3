"""
连接注册表异常定义
"""

from typing import Optional

from .connection_config import BackendKind


class RegistryError(Exception):
    """连接注册表异常基类"""

    def __init__(self, message: str, backend: Optional[BackendKind] = None):
        super().__init__(message)
        self.backend = backend


class PoolBuildError(RegistryError):
    """连接池创建失败（URL 错误、主机不可达、驱动缺失等）"""

    def __init__(self, backend: BackendKind, cause: BaseException):
        super().__init__(f"{backend} 连接池创建失败: {cause}", backend)
        self.cause = cause


class InvalidConnectionNameError(RegistryError, LookupError):
    """注册表中不存在该连接名"""

    def __init__(self, backend: BackendKind, name: str):
        super().__init__(f"{backend} 连接名不存在: {name}", backend)
        self.name = name


class InvalidConnectionTypeError(RegistryError, TypeError):
    """连接名存在，但注册的数据库类型与请求的不一致"""

    def __init__(self, backend: BackendKind, actual: Optional[BackendKind] = None):
        super().__init__(f"连接已存在，但不是 {backend} 类型", backend)
        self.actual = actual


class CheckoutError(RegistryError):
    """从连接池获取连接失败（连接耗尽、连接损坏等）"""

    def __init__(self, backend: BackendKind, name: str, cause: BaseException):
        super().__init__(f"{backend} 连接 {name} 获取失败: {cause}", backend)
        self.name = name
        self.cause = cause


class RegistryClosedError(RegistryError):
    """注册表已关闭"""

    def __init__(self):
        super().__init__("连接注册表已关闭")
