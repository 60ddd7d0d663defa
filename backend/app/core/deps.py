"""Dependency injection for FastAPI routes.

使用 ServiceRegistry 统一管理服务生命周期；测试时可通过
registry.set("kv_store", MemoryKVStore()) 替换存储后端。
"""

from typing import Optional

from fastapi import Depends, Request

from app.core.config import Settings, get_settings
from domains.core import get_service_registry, register_core_services
from domains.note_hub.core import extract_note_id, validate_note_id


# ============================================================================
# Service getters - 使用 ServiceRegistry
# ============================================================================

def _ensure_services_registered():
    """确保服务已注册（延迟初始化）"""
    registry = get_service_registry()
    if "note_service" not in registry:
        register_core_services(get_settings())
    return registry


def get_note_service():
    """Get NoteService singleton instance."""
    registry = _ensure_services_registered()
    return registry.get("note_service")


def get_kv_store():
    """Get the key-value store backing the note store."""
    registry = _ensure_services_registered()
    return registry.get("kv_store")


# ============================================================================
# Path parsing
# ============================================================================

def undecoded_path(request: Request) -> str:
    """
    请求路径的原始（未做百分号解码）形式。

    ASGI 的 scope["raw_path"] 不含查询串；缺失时退回解码后的路径。
    """
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return request.url.path
    return raw_path.split(b"?", 1)[0].decode("latin-1")


def get_note_id(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[str]:
    """
    从请求路径解析笔记 ID。

    按未解码的路径校验，/abc%2Dd 这类转义写法一律视为非法。
    路径为空时返回 None（由路由重定向到新生成的 ID）；
    ID 非法时抛出 InvalidNoteIdError（400）。
    """
    note_id = extract_note_id(undecoded_path(request))
    if note_id is None:
        return None
    return validate_note_id(note_id, max_length=settings.NOTE_ID_MAX_LENGTH)
