"""Shared test fixtures."""

import os

import nats
import pytest
from tradepost import SessionBusClient


@pytest.fixture
def nats_url() -> str:
    return os.environ.get("NATS_URL", "nats://localhost:4222")


@pytest.fixture
async def nats_available(nats_url: str) -> None:
    """Skip the test when no NATS server answers at `nats_url`."""
    try:
        nc = await nats.connect(nats_url, connect_timeout=1, allow_reconnect=False)
    except Exception:
        pytest.skip(f"NATS not reachable at {nats_url}")
    await nc.close()


@pytest.fixture
async def bus_client(nats_url: str, nats_available: None) -> SessionBusClient:
    """Provide a connected SessionBusClient, cleaned up after use."""
    client = SessionBusClient(nats_url)
    await client.connect()
    yield client  # type: ignore[misc]
    await client.close()
