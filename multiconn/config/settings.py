"""
项目配置设置
"""

import os
from typing import Optional
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv

# 加载 .env 文件（从当前工作目录向上查找）
load_dotenv(find_dotenv(usecwd=True))


def _get_env_var_as_int(name: str, default: str) -> int:
    """安全地从环境变量获取整数值，移除行内注释。"""
    value_str = os.getenv(name, default)
    # 移除注释和两边的空格
    cleaned_value = value_str.split("#")[0].strip()
    return int(cleaned_value)


def _get_env_var_as_bool(name: str, default: str) -> bool:
    value_str = os.getenv(name, default)
    return value_str.split("#")[0].strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """连接注册表配置"""

    def __init__(self):
        # 连接池配置（所有后端共用）
        self.pool_min_cached: int = _get_env_var_as_int("DB_POOL_MIN_CACHED", "1")
        self.pool_max_cached: int = _get_env_var_as_int("DB_POOL_MAX_CACHED", "0")
        self.pool_blocking: bool = _get_env_var_as_bool("DB_POOL_BLOCKING", "true")
        self.pool_max_usage: int = _get_env_var_as_int("DB_POOL_MAX_USAGE", "0")
        self.pool_ping: int = _get_env_var_as_int("DB_POOL_PING", "1")

        # 日志配置
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_format: str = os.getenv(
            "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    def pool_kwargs(self, pool_size: int) -> dict:
        """
        生成 PooledDB 的通用参数

        Args:
            pool_size: 最大连接数

        Returns:
            dict: 传给 PooledDB 的关键字参数
        """
        return {
            "mincached": min(self.pool_min_cached, pool_size),
            "maxcached": self.pool_max_cached,
            "maxconnections": pool_size,
            "blocking": self.pool_blocking,
            "maxusage": self.pool_max_usage or None,
            "ping": self.pool_ping,
        }


@lru_cache()
def get_settings() -> Settings:
    """获取配置实例（单例模式）"""
    return Settings()


def reload_settings(overrides: Optional[dict] = None) -> Settings:
    """
    清除缓存并重新读取环境变量

    Args:
        overrides: 需要覆盖的属性

    Returns:
        Settings: 新的配置实例
    """
    get_settings.cache_clear()
    settings = get_settings()
    for key, value in (overrides or {}).items():
        if not hasattr(settings, key):
            raise AttributeError(f"未知配置项: {key}")
        setattr(settings, key, value)
    return settings
