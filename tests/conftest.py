import pytest

from adapters.bunny_stream_filesystem import BunnyStreamFilesystem
from src.core.config import StreamConfig
from tests.fakes.fake_cdn_client import FakeCdnClient
from tests.fakes.fake_stream_api import FakeStreamApi


@pytest.fixture
def stream_config():
    """Library settings pointing at a fictional pull zone."""
    return StreamConfig(
        hostname="vz-test.b-cdn.net",
        library_id=4242,
        api_key="test-api-key",
        timeout=5.0,
    )


@pytest.fixture
def fake_api():
    return FakeStreamApi()


@pytest.fixture
def fake_cdn():
    return FakeCdnClient()


@pytest.fixture
def filesystem(fake_api, fake_cdn):
    """Filesystem adapter over in-memory fakes."""
    return BunnyStreamFilesystem(fake_api, fake_cdn, items_per_page=2)
