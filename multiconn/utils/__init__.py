"""
工具模块
包含日志配置、连接字符串处理等工具
"""

from .logging_util import setup_logging
from .url_util import mask_url

__all__ = ["setup_logging", "mask_url"]
