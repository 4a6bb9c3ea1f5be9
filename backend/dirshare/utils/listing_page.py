"""HTML rendering of a directory listing."""

from __future__ import annotations

import html
import os
from urllib.parse import quote

from dirshare.schemas.files import DirectoryEntry, display_text
from dirshare.services.content_types import file_icon

KB = 1024
MB = KB * 1024
GB = MB * 1024

BREADCRUMB_MAX_CHARS = 10

_STYLE = """
        :root {
            --bg-color: #f8f9fa;
            --card-bg: white;
            --text-color: #333;
            --accent: #4a6eb5;
            --hover: #e9f0ff;
            --border: #eaeaea;
        }
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif;
            background: var(--bg-color);
            color: var(--text-color);
            line-height: 1.6;
            padding: 20px;
            max-width: 1200px;
            margin: 0 auto;
        }
        h1 {
            font-size: 24px;
            font-weight: 500;
            margin-bottom: 20px;
            padding-bottom: 10px;
            border-bottom: 1px solid var(--border);
        }
        .container {
            background: var(--card-bg);
            border-radius: 8px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.05);
            overflow: hidden;
        }
        .file-list {
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(250px, 1fr));
            gap: 4px;
            padding: 16px;
        }
        .file-item {
            display: flex;
            align-items: center;
            padding: 10px 15px;
            border-radius: 6px;
            transition: all 0.2s;
        }
        .file-item:hover { background: var(--hover); }
        .icon {
            margin-right: 10px;
            font-size: 20px;
            color: var(--accent);
            width: 24px;
            text-align: center;
        }
        .folder-icon { color: #e9bc4f; }
        .details { flex-grow: 1; overflow: hidden; }
        .name { white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }
        .size { font-size: 12px; color: #777; }
        a { text-decoration: none; color: inherit; display: block; width: 100%; }
        .breadcrumb {
            padding: 10px 20px;
            background: var(--card-bg);
            border-bottom: 1px solid var(--border);
            white-space: nowrap;
            overflow-x: auto;
        }
        .breadcrumb a { color: var(--accent); display: inline; }
        .empty { padding: 30px; text-align: center; color: #777; }
"""


def format_size(size: int) -> str:
    """Human-readable size: bytes below 1 KB, one decimal above."""
    if size < KB:
        return f"{size} B"
    if size < MB:
        return f"{size / KB:.1f} KB"
    if size < GB:
        return f"{size / MB:.1f} MB"
    return f"{size / GB:.1f} GB"


def _href(relative_path: str) -> str:
    # Quote the raw bytes so names that are not UTF-8 still resolve
    return "/files/" + quote(os.fsencode(relative_path))


def render_breadcrumbs(current_path: str) -> str:
    crumbs = ['<a href="/">Home</a>']
    parts = [p for p in current_path.split("/") if p]
    for idx, part in enumerate(parts):
        label = display_text(part)
        if idx < len(parts) - 1 and len(label) > BREADCRUMB_MAX_CHARS:
            label = label[:BREADCRUMB_MAX_CHARS] + "..."
        crumbs.append(
            f'<a href="{_href("/".join(parts[: idx + 1]))}">{html.escape(label)}</a>'
        )
    return " / ".join(crumbs)


def _item(entry: DirectoryEntry, icon: str, icon_class: str, detail: str) -> str:
    return (
        f'<a href="{_href(entry.relative_path)}" class="file-item">'
        f'<div class="{icon_class}">{icon}</div>'
        '<div class="details">'
        f'<div class="name">{html.escape(entry.name)}</div>'
        f'<div class="size">{detail}</div>'
        "</div></a>"
    )


def render_listing(
    folders: list[DirectoryEntry],
    files: list[DirectoryEntry],
    current_path: str = "/",
) -> str:
    """Full HTML page: breadcrumbs, then folders, then files."""
    items = [_item(f, "📁", "icon folder-icon", "Directory") for f in folders]
    items += [_item(f, file_icon(f.name), "icon", format_size(f.size_bytes)) for f in files]
    if not items:
        items.append('<div class="empty">This folder is empty</div>')
    entries_html = "".join(items)

    title = "File Server" if current_path in ("", "/") else f"File Server - /{display_text(current_path.strip('/'))}"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)}</title>
    <style>{_STYLE}    </style>
</head>
<body>
    <h1>File Server</h1>
    <div class="container">
        <div class="breadcrumb">
            {render_breadcrumbs(current_path)}
        </div>
        <div class="file-list">
            {entries_html}
        </div>
    </div>
</body>
</html>"""
