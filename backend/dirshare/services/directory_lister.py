"""One-level directory enumeration into sorted folder / file entries."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from dirshare.errors import DirectoryReadFailed, PathNotFound, PermissionDenied
from dirshare.schemas.files import DirectoryEntry, DirectoryListing, display_text

logger = logging.getLogger(__name__)


def _entry_stat(entry: os.DirEntry) -> os.stat_result:
    try:
        return entry.stat()
    except FileNotFoundError:
        # Dangling symlink: list the link itself
        if entry.is_symlink():
            return entry.stat(follow_symlinks=False)
        raise


def _scan(directory: Path, prefix: str) -> DirectoryListing:
    folders: list[DirectoryEntry] = []
    files: list[DirectoryEntry] = []

    with os.scandir(directory) as it:
        for entry in it:
            try:
                st = _entry_stat(entry)
            except FileNotFoundError:
                # Entry vanished after enumeration; the listing is no longer whole
                logger.error("Entry %r disappeared while listing %r", entry.name, prefix or "/")
                raise DirectoryReadFailed() from None
            relative_path = f"{prefix}/{entry.name}" if prefix else entry.name
            if stat.S_ISDIR(st.st_mode):
                folders.append(DirectoryEntry(
                    name=display_text(entry.name),
                    relative_path=relative_path,
                    is_directory=True,
                ))
            else:
                files.append(DirectoryEntry(
                    name=display_text(entry.name),
                    relative_path=relative_path,
                    size_bytes=st.st_size,
                ))

    # Plain codepoint order: case-sensitive, locale-independent
    folders.sort(key=lambda e: e.name)
    files.sort(key=lambda e: e.name)

    return DirectoryListing(path=prefix or "/", folders=folders, files=files)


async def list_directory(directory: Path, prefix: str = "") -> DirectoryListing:
    """Enumerate ``directory`` addressing each entry under ``prefix``.

    Any failure while reading the directory or an entry's metadata fails the
    whole listing; partial results are never returned.
    """
    prefix = prefix.strip("/")
    try:
        return await run_in_threadpool(_scan, directory, prefix)
    except (FileNotFoundError, NotADirectoryError):
        raise PathNotFound() from None
    except PermissionError:
        raise PermissionDenied() from None
    except OSError as e:
        logger.error("Failed to read directory %r: %s", prefix or "/", e.strerror)
        raise DirectoryReadFailed() from None
