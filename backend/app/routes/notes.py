"""Note routes.

一个笔记占用一个 URL 路径：

- GET  /           -> 302 到新生成的 /<id>
- GET  /<id>       -> HTML 编辑器；raw 模式（?raw 或 curl/Wget）返回纯文本，不存在 404
- POST /<id>       -> 保存（表单字段 text 或原始请求体），空文本即删除，返回 "OK"
- 其他方法         -> 与 GET 相同（只读）
- 非法 ID          -> 400 "Invalid note ID"

所有响应都带 Cache-Control: no-store。路径首段之后的部分被忽略。
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from app.core.config import Settings, get_settings
from app.core.deps import get_note_id, get_note_service
from app.core.exceptions import NO_STORE_HEADERS
from domains.core import NoteNotFoundError
from domains.infra.logging import get_logger
from domains.note_hub.core import generate_note_id, is_raw_request
from domains.note_hub.rendering import render_editor_page

logger = get_logger(__name__)

router = APIRouter()

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
FORM_TEXT_FIELD = "text"
READ_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


def redirect_to_new_note(settings: Settings) -> RedirectResponse:
    """302 to a freshly generated note id."""
    note_id = generate_note_id(settings.GENERATED_ID_LENGTH)
    logger.info("note_id_generated", note_id=note_id)
    return RedirectResponse(f"/{note_id}", status_code=302, headers=NO_STORE_HEADERS)


async def read_submitted_text(request: Request) -> str:
    """
    Extract the note text from a save request.

    Form-encoded bodies contribute their ``text`` field (missing means
    empty); any other body is taken verbatim as UTF-8.
    """
    content_type = request.headers.get("content-type", "")

    if FORM_CONTENT_TYPE in content_type:
        form = await request.form()
        return form.get(FORM_TEXT_FIELD) or ""
    return (await request.body()).decode("utf-8", errors="replace")


@router.api_route("/{path:path}", methods=READ_METHODS)
async def read_note(
    request: Request,
    note_id: Optional[str] = Depends(get_note_id),
    service=Depends(get_note_service),
    settings: Settings = Depends(get_settings),
):
    """Render the editor, or the raw text for command-line clients."""
    if note_id is None:
        return redirect_to_new_note(settings)

    content = await service.load(note_id)

    if is_raw_request(request.query_params, request.headers.get("user-agent")):
        if content is None:
            raise NoteNotFoundError(note_id)
        return PlainTextResponse(content, headers=NO_STORE_HEADERS)

    html = render_editor_page(
        note_id,
        content or "",
        sync_interval_ms=settings.SYNC_INTERVAL_MS,
    )
    return HTMLResponse(html, headers=NO_STORE_HEADERS)


@router.post("/{path:path}")
async def save_note(
    request: Request,
    note_id: Optional[str] = Depends(get_note_id),
    service=Depends(get_note_service),
    settings: Settings = Depends(get_settings),
):
    """Save the submitted text; empty text deletes the note."""
    if note_id is None:
        return redirect_to_new_note(settings)

    text = await read_submitted_text(request)
    await service.save(note_id, text)
    return PlainTextResponse("OK", headers=NO_STORE_HEADERS)
