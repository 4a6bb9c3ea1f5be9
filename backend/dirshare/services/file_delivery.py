"""Whole-file and ranged delivery of a resolved file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, AsyncIterator

import aiofiles
from fastapi.responses import Response, StreamingResponse
from starlette.types import Receive, Scope, Send

from dirshare.errors import PathNotFound, PermissionDenied, StreamIOFailed
from dirshare.services.bounded_reader import DEFAULT_CHUNK_SIZE, BoundedReader
from dirshare.services.content_types import content_type_for
from dirshare.services.file_cache import SmallFileCache
from dirshare.services.path_resolver import ResolvedPath
from dirshare.services.range_parser import parse_range

logger = logging.getLogger(__name__)

DEFAULT_CACHE_THRESHOLD = 1024 * 1024  # 1 MiB


class FileStreamResponse(StreamingResponse):
    """Streaming response that owns the open file behind its body.

    The handle is closed once the response finishes, including when the
    client goes away before the first chunk is pulled from the body.
    """

    def __init__(self, content, handle, **kwargs):
        super().__init__(content, **kwargs)
        self.handle = handle

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.handle.close()


class DeliveryKind(str, Enum):
    CACHE_HIT = "cache_hit"
    BUFFERED = "buffered"
    STREAMED = "streamed"
    PARTIAL = "partial"


@dataclass
class Delivery:
    """How one file request is answered. Exactly one of body / stream is set."""

    kind: DeliveryKind
    status_code: int
    content_type: str
    content_length: int
    body: bytes | None = None
    stream: AsyncIterator[bytes] | None = None
    content_range: str | None = None
    handle: Any = None  # open file behind ``stream``

    @property
    def headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": self.content_type,
            "Content-Length": str(self.content_length),
            "Accept-Ranges": "bytes",
        }
        if self.content_range is not None:
            headers["Content-Range"] = self.content_range
        return headers

    def to_response(self) -> Response:
        # Content-Type goes in verbatim; media_type would append a charset
        if self.body is not None:
            return Response(content=self.body, status_code=self.status_code, headers=self.headers)
        return FileStreamResponse(
            self.stream, self.handle, status_code=self.status_code, headers=self.headers,
        )


class FileDelivery:
    """Owns the small-file cache and answers file requests.

    Range requests never read or write the cache. Whole-file requests are
    served from the cache when possible, read into it when the file is at or
    below ``threshold_bytes``, and streamed from disk otherwise.
    """

    def __init__(
        self,
        cache: SmallFileCache,
        threshold_bytes: int = DEFAULT_CACHE_THRESHOLD,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self._cache = cache
        self._threshold = threshold_bytes
        self._chunk_size = chunk_size

    @property
    def cache(self) -> SmallFileCache:
        return self._cache

    @property
    def threshold_bytes(self) -> int:
        return self._threshold

    async def deliver(
        self,
        resolved: ResolvedPath,
        request_path: str,
        range_header: str | None = None,
    ) -> Delivery:
        content_type = content_type_for(resolved.path.name)

        if range_header is not None:
            return await self._partial(resolved, range_header, content_type)

        cached = self._cache.get(request_path)
        if cached is not None:
            return Delivery(
                kind=DeliveryKind.CACHE_HIT,
                status_code=200,
                content_type=content_type,
                content_length=len(cached),
                body=cached,
            )

        if resolved.size <= self._threshold:
            content = await self._read_all(resolved.path)
            self._cache.put(request_path, content)
            return Delivery(
                kind=DeliveryKind.BUFFERED,
                status_code=200,
                content_type=content_type,
                content_length=len(content),
                body=content,
            )

        handle = await self._open(resolved.path)
        reader = BoundedReader(handle, resolved.size, self._chunk_size)
        return Delivery(
            kind=DeliveryKind.STREAMED,
            status_code=200,
            content_type=content_type,
            content_length=resolved.size,
            stream=self._stream(handle, reader, resolved.relative),
            handle=handle,
        )

    async def _partial(self, resolved: ResolvedPath, range_header: str, content_type: str) -> Delivery:
        byte_range = parse_range(range_header, resolved.size)

        handle = await self._open(resolved.path)
        try:
            await handle.seek(byte_range.start)
        except OSError as e:
            await handle.close()
            logger.error("Seek failed for %r: %s", resolved.relative, e.strerror)
            raise StreamIOFailed() from None

        reader = BoundedReader(handle, byte_range.length, self._chunk_size)
        return Delivery(
            kind=DeliveryKind.PARTIAL,
            status_code=206,
            content_type=content_type,
            content_length=byte_range.length,
            stream=self._stream(handle, reader, resolved.relative),
            handle=handle,
            content_range=byte_range.content_range(resolved.size),
        )

    async def _open(self, path: Path):
        try:
            return await aiofiles.open(path, "rb")
        except (FileNotFoundError, NotADirectoryError):
            raise PathNotFound() from None
        except PermissionError:
            raise PermissionDenied() from None
        except OSError as e:
            logger.error("Failed to open %s: %s", path.name, e.strerror)
            raise StreamIOFailed() from None

    async def _read_all(self, path: Path) -> bytes:
        handle = await self._open(path)
        try:
            return await handle.read()
        except OSError as e:
            logger.error("Failed to read %s: %s", path.name, e.strerror)
            raise StreamIOFailed() from None
        finally:
            await handle.close()

    async def _stream(self, handle, reader: BoundedReader, relative: str) -> AsyncIterator[bytes]:
        """Yield the reader's chunks; the handle is closed however this ends."""
        try:
            async for chunk in reader:
                yield chunk
        except OSError as e:
            logger.error("Stream read failed for %r: %s", relative, e.strerror)
            raise StreamIOFailed() from None
        finally:
            await handle.close()
