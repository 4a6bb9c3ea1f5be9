"""Client path → absolute filesystem path confined to the shared root."""

from __future__ import annotations

import logging
import os
import re
import stat
from dataclasses import dataclass
from pathlib import Path

import aiofiles.os

from dirshare.errors import PathNotFound, PathTraversalRejected, PermissionDenied, StreamIOFailed

logger = logging.getLogger(__name__)

_SEGMENT_SPLIT = re.compile(r"[/\\]")


@dataclass(frozen=True)
class ResolvedPath:
    path: Path
    relative: str  # POSIX path under the root, "" for the root itself
    is_dir: bool
    size: int


class PathResolver:
    """Resolves request paths under a fixed, already-canonical root."""

    def __init__(self, root: str | Path):
        self._root = os.path.normpath(os.path.abspath(str(root)))

    @property
    def root(self) -> Path:
        return Path(self._root)

    def check(self, relative: str) -> str:
        """Textual validation; no filesystem access.

        Rejects any ``..`` segment and NUL bytes, returns the path with
        surrounding slashes stripped.
        """
        if "\x00" in relative:
            raise PathTraversalRejected()
        if any(segment == ".." for segment in _SEGMENT_SPLIT.split(relative)):
            raise PathTraversalRejected()
        return relative.strip("/")

    def join(self, relative: str) -> Path:
        """Join a checked relative path onto the root and verify confinement."""
        cleaned = self.check(relative)
        joined = os.path.normpath(os.path.join(self._root, cleaned))
        if joined != self._root and not joined.startswith(self._root.rstrip(os.sep) + os.sep):
            raise PathTraversalRejected()
        return Path(joined)

    async def resolve(self, relative: str) -> ResolvedPath:
        """Validate, join and stat a request path."""
        path = self.join(relative)
        try:
            st = await aiofiles.os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            raise PathNotFound() from None
        except PermissionError:
            raise PermissionDenied() from None
        except OSError as e:
            logger.error("stat failed for %r: %s", relative, e.strerror)
            raise StreamIOFailed() from None

        is_dir = stat.S_ISDIR(st.st_mode)
        return ResolvedPath(
            path=path,
            relative="" if path == self.root else path.relative_to(self.root).as_posix(),
            is_dir=is_dir,
            size=0 if is_dir else st.st_size,
        )
