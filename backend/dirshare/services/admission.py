"""Concurrency admission gate — caps in-flight HTTP requests."""

from __future__ import annotations

import asyncio
import logging

from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 64


class AdmissionGate:
    """Bounded number of concurrently admitted requests.

    Over the limit, callers wait for a slot in FIFO order instead of being
    rejected.
    """

    def __init__(self, limit: int = DEFAULT_LIMIT):
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._in_flight = 0
        self._waiting = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def waiting(self) -> int:
        return self._waiting

    async def __aenter__(self) -> "AdmissionGate":
        if self._semaphore.locked():
            logger.debug("Admission gate full (%d in flight), request queued", self._in_flight)

        self._waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._waiting -= 1
        self._in_flight += 1
        return self

    async def __aexit__(self, *exc_info) -> None:
        self._in_flight -= 1
        self._semaphore.release()


class AdmissionMiddleware:
    """Pure ASGI middleware holding one gate slot per HTTP request.

    The slot covers the whole response, body streaming included, and is
    released when the downstream app returns or is cancelled by a client
    disconnect.
    """

    def __init__(self, app: ASGIApp, gate: AdmissionGate):
        self.app = app
        self.gate = gate

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async with self.gate:
            await self.app(scope, receive, send)
