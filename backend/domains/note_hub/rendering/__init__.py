"""HTML 渲染"""

from .editor import DEFAULT_SYNC_INTERVAL_MS, escape_html, render_editor_page

__all__ = ['DEFAULT_SYNC_INTERVAL_MS', 'escape_html', 'render_editor_page']
