"""
笔记领域模块

一个笔记就是一个以短 ID 命名的文本块，存放在键值存储中。

核心功能：
- 标识符：随机生成（低歧义字母表）与格式校验
- 存储：ID -> "note:<id>" 键，只用 get / put / delete
- 渲染：带自动同步脚本的 HTML 编辑器页面
- Raw 模式：命令行客户端直接拿纯文本
"""

from .core.models import Note, SaveAction, SaveResult
from .core.store import NoteStore
from .services.note_service import NoteService

__all__ = [
    'Note',
    'SaveAction',
    'SaveResult',
    'NoteStore',
    'NoteService',
]
