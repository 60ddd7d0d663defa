"""
笔记存储层 - 键值数据源

将笔记 ID 映射为存储键（前缀 + ID），对下只调用 KVStore 的 get / put / delete。
"""

from typing import Optional

from domains.infra.kv import KVStore

from .models import Note

DEFAULT_KEY_PREFIX = "note:"


class NoteStore:
    """
    笔记存储层

    不持有任何可变状态，所有一致性保证来自后端 KVStore。
    """

    def __init__(self, kv: KVStore, key_prefix: str = DEFAULT_KEY_PREFIX):
        self.kv = kv
        self.key_prefix = key_prefix

    def key_for(self, note_id: str) -> str:
        """笔记 ID -> 存储键"""
        return f"{self.key_prefix}{note_id}"

    async def get(self, note_id: str) -> Optional[Note]:
        """获取笔记，不存在（或正文为空）返回 None"""
        content = await self.kv.get(self.key_for(note_id))
        if not content:
            return None
        return Note(note_id=note_id, content=content)

    async def put(self, note_id: str, content: str) -> None:
        """写入笔记正文（覆盖）"""
        await self.kv.put(self.key_for(note_id), content)

    async def delete(self, note_id: str) -> None:
        """删除笔记，幂等"""
        await self.kv.delete(self.key_for(note_id))
