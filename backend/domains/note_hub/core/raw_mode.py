"""
Raw 模式判定

命令行客户端（curl / Wget）或显式带 ?raw 参数的请求拿到纯文本正文，
其余请求拿到 HTML 编辑器。判定逻辑集中在 is_raw_request 一处。
"""

from collections.abc import Container
from typing import Optional

RAW_QUERY_PARAM = "raw"
RAW_USER_AGENT_PREFIXES = ("curl", "Wget")


def is_raw_request(query_params: Container[str], user_agent: Optional[str]) -> bool:
    """
    是否以纯文本返回笔记

    Args:
        query_params: 查询参数（只看是否存在 raw 键，值无所谓，?raw 也算）
        user_agent: User-Agent 头，大小写敏感的前缀匹配
    """
    if RAW_QUERY_PARAM in query_params:
        return True
    return (user_agent or "").startswith(RAW_USER_AGENT_PREFIXES)
