"""
笔记标识符：生成、校验与路径解析

新笔记的 ID 从低歧义字母表中随机选取（去掉了 0/o、1/i/l 这类容易看错的字符，
以及 6、8、u、v），长度默认 5，约 1400 万种组合，不检查是否与已有笔记冲突。
随机源使用 secrets，避免 ID 可被预测。
"""

import re
import secrets
from typing import Optional

from domains.core.exceptions import InvalidNoteIdError

ID_ALPHABET = "234579abcdefghjkmnpqrstwxyz"
DEFAULT_ID_LENGTH = 5
MAX_NOTE_ID_LENGTH = 64

_NOTE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def generate_note_id(length: int = DEFAULT_ID_LENGTH) -> str:
    """生成随机笔记 ID"""
    if length < 1:
        raise ValueError(f"length must be positive, got {length}")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def is_valid_note_id(value: str, max_length: int = MAX_NOTE_ID_LENGTH) -> bool:
    """ID 只能包含字母、数字、下划线和连字符，长度 1..max_length"""
    if not value or len(value) > max_length:
        return False
    # fullmatch 而非 match：$ 会放过结尾的换行符
    return _NOTE_ID_PATTERN.fullmatch(value) is not None


def validate_note_id(value: str, max_length: int = MAX_NOTE_ID_LENGTH) -> str:
    """
    校验笔记 ID，合法则原样返回

    Raises:
        InvalidNoteIdError: ID 格式非法（HTTP 400）
    """
    if not is_valid_note_id(value, max_length=max_length):
        raise InvalidNoteIdError(value)
    return value


def extract_note_id(path: str) -> Optional[str]:
    """
    从 URL 路径中取出笔记 ID（第一个非空路径段）

    "/abc12" -> "abc12"，"/abc12/extra" -> "abc12"，"/" -> None
    """
    for segment in path.split("/"):
        if segment:
            return segment
    return None
