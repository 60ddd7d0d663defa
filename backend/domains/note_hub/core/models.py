"""
笔记数据模型定义

笔记只有两个字段：标识符和正文。没有版本、元数据或关联关系。
正文为空的笔记等同于不存在（保存空文本即删除）。
"""

from dataclasses import dataclass
from enum import Enum


class SaveAction(str, Enum):
    """保存操作的实际结果"""
    STORED = "stored"      # 非空正文，写入（新建与更新无区别）
    DELETED = "deleted"    # 空正文，删除


@dataclass
class Note:
    """
    笔记数据类

    Attributes:
        note_id: 笔记标识符，匹配 [A-Za-z0-9_-]{1,64}
        content: 笔记正文（任意 UTF-8 文本，原样保存，不做 trim）
    """
    note_id: str
    content: str = ""


@dataclass(frozen=True)
class SaveResult:
    """一次保存请求的结果"""
    note_id: str
    action: SaveAction
    length: int = 0
