"""
编辑器页面渲染

render_editor_page 是纯函数：(note_id, content) -> 完整 HTML 文档。
页面用 jinja2 渲染并开启自动转义，note_id 和正文由 markupsafe 转义。
页面自带自动同步脚本：每隔 sync_interval_ms 检查一次文本框，
内容与上次同步的快照不同就 POST 回当前 URL；无论成功失败都按同样间隔
安排下一次检查，上一次请求结束前不会发起新请求。
"""

from jinja2 import DictLoader, Environment
from markupsafe import escape

DEFAULT_SYNC_INTERVAL_MS = 1000

EDITOR_TEMPLATE = "editor.html"


def escape_html(text: str) -> str:
    """转义 & < > " ' 以便安全嵌入 HTML 文本和属性"""
    return str(escape(text))


# <textarea> 起始标签后紧跟的一个换行会被浏览器丢弃，
# 模板在 {{ content }} 前固定多输出一个换行，以开头换行的正文才能原样显示。
_PAGE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<meta name="apple-mobile-web-app-capable" content="yes">
<title>{{ note_id }}</title>
<link rel="icon" href="data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 100 100'%3E%3Ctext y='.9em' font-size='90'%3E%F0%9F%93%9D%3C/text%3E%3C/svg%3E">
<style>
body {
  margin: 0;
  background: #ebeef1;
  color: #000;
  font-family: "Roboto Mono", monospace;
}
.container {
  position: absolute;
  top: 20px;
  right: 20px;
  bottom: 50px;
  left: 20px;
}
#content {
  margin: 0;
  padding: 20px;
  overflow-y: auto;
  resize: none;
  width: 100%;
  height: 100%;
  box-sizing: border-box;
  border: 1px solid #ddd;
  outline: none;
  font-family: "Roboto Mono", monospace;
  font-size: 1em;
  line-height: 1.7;
}
.controls {
  position: fixed;
  bottom: 10px;
  left: 20px;
}
.controls a, .controls button {
  margin-right: 10px;
  padding: 4px 10px;
  background: #ebeef1;
  border: 1px solid #999;
  border-radius: 3px;
  text-decoration: none;
  color: #000;
  font-size: 0.8em;
  cursor: pointer;
  font-family: "Roboto Mono", monospace;
}
.controls a:hover, .controls button:hover { background: #ddd; }
body.dark { background: #333b4d; color: #fff; }
body.dark #content { background: #24262b; border-color: #495265; color: #fff; }
body.dark .controls a, body.dark .controls button { background: #383838; color: #ccc; border-color: #555; }
body.dark .controls a:hover, body.dark .controls button:hover { background: #555; }
body.dark ::selection, body.dark textarea::selection { background: rgba(255,255,255,.25); color: inherit; }
</style>
</head>
<body>
<div class="container">
<textarea id="content" placeholder="Start typing...">
{{ content }}</textarea>
</div>

<div class="controls">
  <a href="#" id="downloadLink">Download TXT</a>
  <a href="#" id="copyLink">Copy</a>
  <a href="#" id="deleteLink">Delete</a>
  <a href="#" id="emailLink">Send by E-mail</a>
  <button id="toggleDarkBtn" type="button">Toggle Dark</button>
  <button id="refreshBtn" type="button">Refresh</button>
</div>

<script>
var SYNC_INTERVAL_MS = {{ sync_interval_ms }};
var textarea = document.getElementById('content');
var synced = textarea.value;

function postText(text) {
  return fetch(window.location.href, {
    method: 'POST',
    headers: {'Content-Type': 'application/x-www-form-urlencoded; charset=UTF-8'},
    body: 'text=' + encodeURIComponent(text)
  }).then(function(response) {
    if (!response.ok) { throw new Error('save failed: ' + response.status); }
    return response;
  });
}

/* Auto-sync: one request in flight, next check only after it settles */
function syncLoop() {
  if (textarea.value === synced) {
    setTimeout(syncLoop, SYNC_INTERVAL_MS);
    return;
  }
  var pending = textarea.value;
  postText(pending).then(function() {
    synced = pending;
    setTimeout(syncLoop, SYNC_INTERVAL_MS);
  }).catch(function() {
    setTimeout(syncLoop, SYNC_INTERVAL_MS);
  });
}

function noteFileName() {
  return window.location.pathname.split('/').filter(Boolean)[0] + '.txt';
}

function updateLinks() {
  var text = textarea.value;
  var fileName = noteFileName();
  var mailto = 'mailto:?subject=' + encodeURIComponent(fileName) + '&body=' + encodeURIComponent(text);
  var download = document.getElementById('downloadLink');
  try {
    download.href = URL.createObjectURL(new Blob([text], {type: 'text/plain'}));
    download.download = fileName;
  } catch (e) {
    download.href = mailto;
  }
  document.getElementById('emailLink').href = mailto;
}

document.getElementById('copyLink').onclick = function() {
  var link = this;
  textarea.focus();
  textarea.select();
  try {
    if (document.execCommand('copy')) {
      link.textContent = 'Copied!';
      setTimeout(function() { link.textContent = 'Copy'; }, 1500);
      return false;
    }
  } catch (e) {}
  location.href = 'mailto:?body=' + encodeURIComponent(textarea.value);
  return false;
};

document.getElementById('deleteLink').onclick = function() {
  if (!confirm('Delete this note permanently?')) { return false; }
  postText('').then(function() {
    textarea.value = '';
    synced = '';
    location.reload();
  });
  return false;
};

document.getElementById('toggleDarkBtn').onclick = function() {
  document.body.classList.toggle('dark');
};

document.getElementById('refreshBtn').onclick = function() {
  location.reload();
};

textarea.oninput = updateLinks;
updateLinks();
textarea.focus();
syncLoop();
</script>
</body>
</html>
"""

_env = Environment(
    loader=DictLoader({EDITOR_TEMPLATE: _PAGE}),
    autoescape=True,
    keep_trailing_newline=True,
)


def render_editor_page(
    note_id: str,
    content: str,
    sync_interval_ms: int = DEFAULT_SYNC_INTERVAL_MS,
) -> str:
    """
    渲染笔记编辑器页面

    Args:
        note_id: 笔记 ID（作为页面标题）
        content: 笔记正文，不存在时传空字符串
        sync_interval_ms: 自动同步检查间隔（毫秒）
    """
    return _env.get_template(EDITOR_TEMPLATE).render(
        note_id=note_id,
        content=content,
        sync_interval_ms=int(sync_interval_ms),
    )
