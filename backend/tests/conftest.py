import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from memberboard.auth import get_whop_client  # noqa: E402
from memberboard.config import settings  # noqa: E402
from memberboard.main import app  # noqa: E402
from memberboard.services.membership_collector import get_membership_collector  # noqa: E402

from .utils import FakeCollector, FakeWhopClient  # noqa: E402


@pytest.fixture(scope="module")
def anyio_backend():
    # Limit tests to asyncio backend so local runs do not require the Trio extra.
    return "asyncio"


@pytest.fixture
async def async_client(anyio_backend) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    monkeypatch.setattr(settings, "whop_api_key", "test-api-key")
    monkeypatch.setattr(settings, "whop_product_id", "prod_123")
    monkeypatch.setattr(settings, "environment", "production")
    yield settings


@pytest.fixture
def fake_whop():
    client = FakeWhopClient()
    app.dependency_overrides[get_whop_client] = lambda: client
    try:
        yield client
    finally:
        app.dependency_overrides.pop(get_whop_client, None)


@pytest.fixture
def fake_collector():
    collector = FakeCollector()
    app.dependency_overrides[get_membership_collector] = lambda: collector
    try:
        yield collector
    finally:
        app.dependency_overrides.pop(get_membership_collector, None)
