"""Extension-based content classification — MIME type and listing icon."""

from __future__ import annotations

from pathlib import PurePath

DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_ICON = "📄"

MIME_TYPES: dict[str, str] = {
    "html": "text/html",
    "htm": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "pdf": "application/pdf",
    "txt": "text/plain",
    "md": "text/plain",
}

_ICON_GROUPS: list[tuple[str, tuple[str, ...]]] = [
    ("📄", ("pdf",)),
    ("📝", ("doc", "docx")),
    ("📊", ("xls", "xlsx")),
    ("📑", ("ppt", "pptx")),
    ("🖼️", ("jpg", "jpeg", "png", "gif", "bmp", "svg")),
    ("🎵", ("mp3", "wav", "ogg", "flac")),
    ("🎬", ("mp4", "avi", "mov", "wmv", "mkv")),
    ("🗜️", ("zip", "rar", "7z", "tar", "gz")),
    ("⚙️", ("exe", "msi", "app")),
    ("🌐", ("html", "htm")),
    ("🎨", ("css",)),
    ("📜", ("js", "ts")),
    ("💻", ("rs", "go", "py", "java", "c", "cpp", "cs")),
    ("📃", ("md", "txt")),
    ("🔧", ("json", "xml", "yaml", "yml")),
    ("📦", ("git", "gitignore")),
    ("📱", ("apk",)),
    ("💿", ("iso",)),
    ("🧲", ("torrent",)),
    ("🗑️", ("bak", "old", "temp")),
]

ICONS: dict[str, str] = {ext: icon for icon, exts in _ICON_GROUPS for ext in exts}


def _extension(name: str) -> str:
    # ".gitignore" has no suffix for PurePath, but is still worth an icon
    suffix = PurePath(name).suffix or (name if name.startswith(".") else "")
    return suffix.lstrip(".")


def content_type_for(name: str) -> str:
    """MIME type for a file name. Case-sensitive, like the extension table."""
    return MIME_TYPES.get(_extension(name), DEFAULT_MIME_TYPE)


def file_icon(name: str) -> str:
    """Decorative icon for a file name in the HTML listing."""
    return ICONS.get(_extension(name), DEFAULT_ICON)
