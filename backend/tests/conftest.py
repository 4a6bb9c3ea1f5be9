"""Test fixtures: temporary shared root and FastAPI test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dirshare.config import Settings
from dirshare.main import create_app


@pytest.fixture
def root_dir(tmp_path):
    """Shared root with ``a.txt`` ("hello") and ``docs/b.md``."""
    (tmp_path / "a.txt").write_bytes(b"hello")
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "b.md").write_text("# B\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(root_dir):
    return Settings(root_dir=str(root_dir), cache_capacity=4, max_concurrent_requests=8)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app):
    """Provide an async test client bound to the temporary root."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
