import pytest_asyncio

from termview.io import close_global_client


@pytest_asyncio.fixture
async def http_client():
    """Close the shared httpx client after an async test so it never outlives its event loop."""
    yield
    await close_global_client()
