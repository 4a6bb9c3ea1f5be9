"""Tests for the delivery orchestrator: branch selection and cache use."""

import asyncio
from unittest.mock import patch

import aiofiles
import pytest

from dirshare.errors import PermissionDenied, RangeInvalid, RangeMalformed, RangeUnsatisfiable
from dirshare.services.file_cache import SmallFileCache
from dirshare.services.file_delivery import DeliveryKind, FileDelivery
from dirshare.services.path_resolver import PathResolver

THRESHOLD = 16


@pytest.fixture
def big_file(root_dir):
    data = bytes(range(256)) * 4  # 1024 bytes, over THRESHOLD
    (root_dir / "big.bin").write_bytes(data)
    return data


@pytest.fixture
def resolver(root_dir):
    return PathResolver(root_dir)


@pytest.fixture
def delivery():
    return FileDelivery(SmallFileCache(capacity=4), threshold_bytes=THRESHOLD, chunk_size=100)


async def _body(plan) -> bytes:
    if plan.body is not None:
        return plan.body
    return b"".join([chunk async for chunk in plan.stream])


class TestWholeFile:
    @pytest.mark.asyncio
    async def test_small_file_buffered_then_cached(self, resolver, delivery):
        resolved = await resolver.resolve("a.txt")

        with patch("dirshare.services.file_delivery.aiofiles.open", wraps=aiofiles.open) as spy:
            first = await delivery.deliver(resolved, "/files/a.txt")
            second = await delivery.deliver(resolved, "/files/a.txt")

        assert first.kind == DeliveryKind.BUFFERED
        assert second.kind == DeliveryKind.CACHE_HIT
        assert first.body == second.body == b"hello"
        assert spy.call_count == 1

    @pytest.mark.asyncio
    async def test_headers(self, resolver, delivery):
        resolved = await resolver.resolve("a.txt")
        plan = await delivery.deliver(resolved, "/files/a.txt")
        assert plan.status_code == 200
        assert plan.headers == {
            "Content-Type": "text/plain",
            "Content-Length": "5",
            "Accept-Ranges": "bytes",
        }

    @pytest.mark.asyncio
    async def test_file_at_threshold_is_cached(self, root_dir, resolver, delivery):
        (root_dir / "edge.bin").write_bytes(b"e" * THRESHOLD)
        resolved = await resolver.resolve("edge.bin")
        plan = await delivery.deliver(resolved, "/files/edge.bin")
        assert plan.kind == DeliveryKind.BUFFERED
        assert "/files/edge.bin" in delivery.cache

    @pytest.mark.asyncio
    async def test_large_file_streamed_not_cached(self, resolver, delivery, big_file):
        resolved = await resolver.resolve("big.bin")
        plan = await delivery.deliver(resolved, "/files/big.bin")

        assert plan.kind == DeliveryKind.STREAMED
        assert plan.body is None
        assert plan.headers["Content-Length"] == str(len(big_file))
        assert plan.headers["Accept-Ranges"] == "bytes"
        assert plan.headers["Content-Type"] == "application/octet-stream"
        assert await _body(plan) == big_file
        assert "/files/big.bin" not in delivery.cache

    @pytest.mark.asyncio
    async def test_cache_keyed_by_request_path(self, resolver, delivery):
        delivery.cache.put("/files/a.txt", b"stale")
        resolved = await resolver.resolve("a.txt")
        plan = await delivery.deliver(resolved, "/files/a.txt")
        assert plan.kind == DeliveryKind.CACHE_HIT
        assert plan.body == b"stale"
        assert plan.content_length == 5

    @pytest.mark.asyncio
    async def test_permission_denied_on_open(self, resolver, delivery):
        resolved = await resolver.resolve("a.txt")
        with patch(
            "dirshare.services.file_delivery.aiofiles.open",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(PermissionDenied):
                await delivery.deliver(resolved, "/files/a.txt")
        assert "/files/a.txt" not in delivery.cache


class TestPartial:
    @pytest.mark.asyncio
    async def test_partial_slice(self, resolver, delivery, big_file):
        resolved = await resolver.resolve("big.bin")
        plan = await delivery.deliver(resolved, "/files/big.bin", "bytes=250-509")

        assert plan.kind == DeliveryKind.PARTIAL
        assert plan.status_code == 206
        assert plan.headers["Content-Range"] == "bytes 250-509/1024"
        assert plan.headers["Content-Length"] == "260"
        assert plan.headers["Accept-Ranges"] == "bytes"
        assert await _body(plan) == big_file[250:510]

    @pytest.mark.asyncio
    async def test_range_bypasses_cache(self, resolver, delivery):
        delivery.cache.put("/files/a.txt", b"stale")
        resolved = await resolver.resolve("a.txt")
        plan = await delivery.deliver(resolved, "/files/a.txt", "bytes=1-3")
        assert await _body(plan) == b"ell"
        stats = delivery.cache.stats()
        assert stats["hits"] == 0
        assert stats["misses"] == 0

    @pytest.mark.asyncio
    async def test_range_does_not_populate_cache(self, resolver, delivery):
        resolved = await resolver.resolve("a.txt")
        plan = await delivery.deliver(resolved, "/files/a.txt", "bytes=0-")
        await _body(plan)
        assert len(delivery.cache) == 0

    @pytest.mark.asyncio
    async def test_full_open_range(self, resolver, delivery):
        resolved = await resolver.resolve("a.txt")
        plan = await delivery.deliver(resolved, "/files/a.txt", "bytes=0-")
        assert plan.content_range == "bytes 0-4/5"
        assert await _body(plan) == b"hello"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header, error", [
        ("bytes=5-", RangeUnsatisfiable),
        ("bytes=3-1", RangeInvalid),
        ("lines=1-2", RangeMalformed),
    ])
    async def test_range_errors_do_not_open_file(self, resolver, delivery, header, error):
        resolved = await resolver.resolve("a.txt")
        with patch("dirshare.services.file_delivery.aiofiles.open", wraps=aiofiles.open) as spy:
            with pytest.raises(error):
                await delivery.deliver(resolved, "/files/a.txt", header)
        spy.assert_not_called()


class TestStreamResponse:
    @pytest.mark.asyncio
    async def test_handle_closed_when_client_leaves_before_body(self, resolver, delivery, big_file):
        resolved = await resolver.resolve("big.bin")
        plan = await delivery.deliver(resolved, "/files/big.bin")
        response = plan.to_response()

        async def receive():
            return {"type": "http.disconnect"}

        async def send(message):
            await asyncio.sleep(1)

        await response({"type": "http", "method": "GET"}, receive, send)
        assert plan.handle.closed

    @pytest.mark.asyncio
    async def test_handle_closed_after_full_body(self, resolver, delivery, big_file):
        resolved = await resolver.resolve("big.bin")
        plan = await delivery.deliver(resolved, "/files/big.bin", "bytes=0-99")
        sent = []

        async def receive():
            await asyncio.sleep(1)
            return {"type": "http.disconnect"}

        async def send(message):
            sent.append(message)

        await plan.to_response()({"type": "http", "method": "GET"}, receive, send)
        assert b"".join(m.get("body", b"") for m in sent) == big_file[:100]
        assert plan.handle.closed
