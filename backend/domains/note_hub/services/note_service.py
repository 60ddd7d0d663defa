"""
笔记服务层

提供笔记的业务逻辑封装：
- 读取：不存在视为空
- 保存：空文本即删除，非空即覆盖写入（新建与更新是同一个幂等 put）
- 删除：幂等

存储故障以 StoreUnavailableError 原样向上抛出，由 HTTP 层转换为 502。
"""

from typing import Optional

from domains.infra.logging import get_logger

from ..core.models import SaveAction, SaveResult
from ..core.store import NoteStore

logger = get_logger(__name__)


class NoteService:
    """
    笔记服务层

    封装笔记相关的业务逻辑，代理存储层操作。
    """

    def __init__(self, store: NoteStore):
        self._store = store

    @property
    def store(self) -> NoteStore:
        return self._store

    async def load(self, note_id: str) -> Optional[str]:
        """读取笔记正文，不存在返回 None"""
        note = await self._store.get(note_id)
        return note.content if note is not None else None

    async def save(self, note_id: str, text: str) -> SaveResult:
        """
        保存笔记

        Args:
            note_id: 已校验的笔记 ID
            text: 新正文，原样保存（不 trim，保留换行）

        Returns:
            SaveResult，action 为 stored 或 deleted
        """
        if len(text) == 0:
            await self.delete(note_id)
            return SaveResult(note_id=note_id, action=SaveAction.DELETED)

        await self._store.put(note_id, text)
        logger.info("note_saved", note_id=note_id, length=len(text))
        return SaveResult(note_id=note_id, action=SaveAction.STORED, length=len(text))

    async def delete(self, note_id: str) -> None:
        """删除笔记"""
        await self._store.delete(note_id)
        logger.info("note_deleted", note_id=note_id)
