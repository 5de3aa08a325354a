"""Unit tests for BunnyCdnClient adapter."""
import io

import pytest
import requests
from unittest.mock import Mock

from adapters.bunny_cdn_client import PLAYER_REFERER, BunnyCdnClient
from ports.adapter_error import RemoteNotFoundError, TransportFailureError

PULL_ZONE = "https://vz-test.b-cdn.net"


class _RawBody(io.BytesIO):
    """Stand-in for the urllib3 body, which accepts attribute assignment."""


def _response(status_code: int, content: bytes = b"") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = PULL_ZONE
    response._content = content
    response.raw = _RawBody(content)
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def cdn(stream_config, session):
    return BunnyCdnClient(stream_config, session=session)


@pytest.mark.unit
class TestBunnyCdnClient:
    """Tests for CDN reads."""

    def test_base_url(self, cdn):
        assert cdn.base_url == PULL_ZONE

    def test_get_contents(self, cdn, session):
        session.get.return_value = _response(200, b"#EXTM3U")

        assert cdn.get_contents("v1/playlist.m3u8") == b"#EXTM3U"
        args, kwargs = session.get.call_args
        assert args == (f"{PULL_ZONE}/v1/playlist.m3u8",)
        assert kwargs["headers"] == {
            "Referer": PULL_ZONE,
            "Accept": "*/*",
            "AccessKey": "test-api-key",
        }

    def test_get_contents_retries_with_player_referer(self, cdn, session):
        session.get.side_effect = [_response(403), _response(200, b"mp4")]

        assert cdn.get_contents("v1/play_720p.mp4") == b"mp4"
        referers = [c.kwargs["headers"]["Referer"] for c in session.get.call_args_list]
        assert referers == [PULL_ZONE, PLAYER_REFERER]

    def test_get_contents_gives_up(self, cdn, session):
        session.get.side_effect = [_response(403), requests.ConnectionError("reset")]

        assert cdn.get_contents("v1/original") is None
        assert session.get.call_count == 2

    def test_open_stream(self, cdn, session):
        session.get.return_value = _response(200, b"segment")

        stream = cdn.open_stream("v1/360p/video0.ts")

        assert stream.read() == b"segment"
        assert session.get.call_args.kwargs["stream"] is True

    def test_open_stream_not_found(self, cdn, session):
        response = _response(404)
        response.close = Mock()
        session.get.return_value = response

        with pytest.raises(RemoteNotFoundError):
            cdn.open_stream("v1/missing.jpg")

        response.close.assert_called_once()

    def test_open_stream_keeps_response_open_on_success(self, cdn, session):
        response = _response(200, b"segment")
        response.close = Mock()
        session.get.return_value = response

        cdn.open_stream("v1/original")

        response.close.assert_not_called()

    def test_open_stream_transport_error(self, cdn, session):
        session.get.side_effect = requests.Timeout("slow")

        with pytest.raises(TransportFailureError):
            cdn.open_stream("v1/original")
