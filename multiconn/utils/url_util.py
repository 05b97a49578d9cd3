"""
连接字符串工具
"""

from urllib.parse import urlsplit, urlunsplit


def mask_url(url: str) -> str:
    """
    隐藏连接字符串中的密码，用于日志和统计输出

    Args:
        url: 原始连接字符串

    Returns:
        str: 密码替换为 *** 的连接字符串
    """
    if "://" not in url:
        return url

    parts = urlsplit(url)
    if parts.password is None:
        return url

    userinfo, _, hostinfo = parts.netloc.rpartition("@")
    user = userinfo.split(":", 1)[0]
    return urlunsplit(parts._replace(netloc=f"{user}:***@{hostinfo}"))
