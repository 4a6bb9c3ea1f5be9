"""Directory listing schemas."""

from pydantic import BaseModel, field_serializer


def display_text(name: str) -> str:
    """Printable form of a filesystem name.

    Bytes that are not valid UTF-8 arrive as lone surrogates and are shown
    as U+FFFD instead.
    """
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class DirectoryEntry(BaseModel):
    """One entry of a directory listing."""
    name: str  # display name, always valid UTF-8
    relative_path: str  # path under /files/ addressing this entry
    size_bytes: int = 0  # always 0 for directories
    is_directory: bool = False

    @field_serializer("relative_path")
    def _printable_path(self, value: str) -> str:
        return display_text(value)


class DirectoryListing(BaseModel):
    """Folders and files of one directory, each sorted by name."""
    path: str
    folders: list[DirectoryEntry] = []
    files: list[DirectoryEntry] = []

    @field_serializer("path")
    def _printable_path(self, value: str) -> str:
        return display_text(value)
