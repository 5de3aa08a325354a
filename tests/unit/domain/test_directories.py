"""Unit tests for CollectionResolver."""
import pytest
from unittest.mock import Mock

from domain.directories import CollectionResolver
from domain.models import CollectionEntity
from ports.adapter_error import InvalidArgumentError, TransportFailureError
from ports.stream_api import StreamApi
from tests.fakes.fake_stream_api import FakeStreamApi


@pytest.fixture
def mock_api():
    """Mock stream API."""
    return Mock(spec=StreamApi)


@pytest.mark.unit
class TestFindCollection:
    """Tests for directory lookup."""

    def test_exact_match_among_search_results(self, mock_api):
        mock_api.list_collections.return_value = [
            CollectionEntity(guid="c1", name="courses/intro/extra"),
            CollectionEntity(guid="c2", name="courses/intro"),
            CollectionEntity(guid="c3", name="courses/intro"),
        ]
        resolver = CollectionResolver(mock_api, items_per_page=500)

        found = resolver.find_collection("/courses/intro/")

        assert found.guid == "c2"
        mock_api.list_collections.assert_called_once_with(
            page=1, items_per_page=500, search="courses/intro"
        )

    def test_no_exact_match(self):
        api = FakeStreamApi()
        api.add_collection("courses")
        resolver = CollectionResolver(api)

        assert resolver.find_collection("course") is None
        assert resolver.find_collection_id("course") is None

    def test_exact_match_past_first_search_page(self):
        api = FakeStreamApi()
        for name in ["media/a", "media/b", "media"]:
            api.add_collection(name)
        resolver = CollectionResolver(api, items_per_page=2)

        found = resolver.find_collection("media")

        assert found.name == "media"
        assert [c[1] for c in api.calls_to("list_collections")] == [1, 2]

    def test_stops_at_page_holding_match(self, mock_api):
        mock_api.list_collections.side_effect = [
            [CollectionEntity(guid="c1", name="media/a")],
            [CollectionEntity(guid="c2", name="media")],
            AssertionError("page 3 must not be requested"),
        ]
        resolver = CollectionResolver(mock_api, items_per_page=1)

        assert resolver.find_collection_id("media") == "c2"
        assert mock_api.list_collections.call_count == 2

    def test_search_failure_propagates(self, mock_api):
        mock_api.list_collections.side_effect = TransportFailureError("timeout")
        resolver = CollectionResolver(mock_api)

        with pytest.raises(TransportFailureError):
            resolver.find_collection("media")

    @pytest.mark.parametrize("path", [None, "", "/"])
    def test_empty_path_short_circuits(self, mock_api, path):
        resolver = CollectionResolver(mock_api)

        assert resolver.find_collection(path) is None
        mock_api.list_collections.assert_not_called()


@pytest.mark.unit
class TestEnsureCollection:
    """Tests for find-or-create."""

    def test_creates_when_absent(self):
        api = FakeStreamApi()
        resolver = CollectionResolver(api)

        collection = resolver.ensure_collection("courses/intro")

        assert collection.name == "courses/intro"
        assert api.calls_to("create_collection") == [("create_collection", "courses/intro")]

    def test_second_call_finds_existing(self):
        api = FakeStreamApi()
        resolver = CollectionResolver(api)

        first = resolver.ensure_collection("courses/intro")
        second = resolver.ensure_collection("courses/intro")

        assert first.guid == second.guid
        assert len(api.calls_to("create_collection")) == 1
        assert len(api.calls_to("list_collections")) == 2

    def test_existing_collection_beyond_first_page_not_duplicated(self):
        api = FakeStreamApi()
        api.add_collection("media/a")
        api.add_collection("media/b")
        resolver = CollectionResolver(api, items_per_page=2)

        first = resolver.ensure_collection("media")
        second = resolver.ensure_collection("media")

        assert first.guid == second.guid
        assert api.calls_to("create_collection") == [("create_collection", "media")]

    def test_empty_path_rejected(self, mock_api):
        resolver = CollectionResolver(mock_api)

        with pytest.raises(InvalidArgumentError):
            resolver.ensure_collection("/")


@pytest.mark.unit
class TestMakeAndDeleteDirectory:
    """Tests for make_directory() and delete_directory()."""

    def test_make_directory_creates(self):
        api = FakeStreamApi()
        resolver = CollectionResolver(api)

        assert resolver.make_directory("media/2024/") is True
        assert [c.name for c in api.collections.values()] == ["media/2024"]

    def test_make_directory_existing_is_success(self):
        api = FakeStreamApi()
        api.add_collection("media")
        resolver = CollectionResolver(api)

        assert resolver.make_directory("media") is True
        assert api.calls_to("create_collection") == []

    @pytest.mark.parametrize("path", [None, "", "/"])
    def test_make_directory_empty_rejected(self, mock_api, path):
        resolver = CollectionResolver(mock_api)

        with pytest.raises(InvalidArgumentError) as exc_info:
            resolver.make_directory(path)

        assert exc_info.value.code == "INVALID_ARGUMENT"
        mock_api.create_collection.assert_not_called()

    def test_delete_missing_directory_is_success(self):
        api = FakeStreamApi()
        resolver = CollectionResolver(api)

        assert resolver.delete_directory("nowhere") is True
        assert api.calls_to("delete_collection") == []

    def test_delete_existing_directory(self):
        api = FakeStreamApi()
        collection = api.add_collection("media")
        resolver = CollectionResolver(api)

        assert resolver.delete_directory("/media") is True
        assert api.calls_to("delete_collection") == [("delete_collection", collection.guid)]

    def test_delete_directory_found_beyond_first_page(self):
        api = FakeStreamApi()
        api.add_collection("media/a")
        api.add_collection("media/b")
        collection = api.add_collection("media")
        resolver = CollectionResolver(api, items_per_page=2)

        assert resolver.delete_directory("media") is True
        assert api.calls_to("delete_collection") == [("delete_collection", collection.guid)]
        assert [c.name for c in api.collections.values()] == ["media/a", "media/b"]

    def test_delete_directory_reports_remote_failure(self, mock_api):
        mock_api.list_collections.return_value = [CollectionEntity(guid="c1", name="media")]
        mock_api.delete_collection.return_value = 500
        resolver = CollectionResolver(mock_api)

        assert resolver.delete_directory("media") is False


@pytest.mark.unit
class TestListDirectories:
    """Tests for full listings."""

    @pytest.fixture
    def api(self):
        api = FakeStreamApi()
        for name in ["a", "a/b", "a/b/c", "ab", "z", "a"]:
            api.add_collection(name)
        return api

    def test_all_directories(self, api):
        resolver = CollectionResolver(api, items_per_page=2)

        assert resolver.list_directories() == ["a", "a/b", "a/b/c", "ab", "z"]
        # 6 collections in pages of 2, then the empty page.
        assert len(api.calls_to("list_collections")) == 4

    def test_prefix_filter(self, api):
        resolver = CollectionResolver(api, items_per_page=2)

        assert resolver.list_directories("/a/") == ["a", "a/b", "a/b/c"]
        assert resolver.list_directories("a/b") == ["a/b", "a/b/c"]
        assert resolver.list_directories("missing") == []

    def test_partial_listing_on_error(self, mock_api):
        mock_api.list_collections.side_effect = [
            [CollectionEntity(guid="c1", name="a"), CollectionEntity(guid="c2", name="b")],
            TransportFailureError("timeout"),
        ]
        resolver = CollectionResolver(mock_api, items_per_page=2)

        assert resolver.list_directories() == ["a", "b"]

    def test_all_videos_in_collection(self):
        api = FakeStreamApi()
        collection = api.add_collection("media")
        inside = api.add_video(collection_id=collection.guid)
        api.add_video()
        resolver = CollectionResolver(api)

        videos = resolver.all_videos(collection.guid)

        assert [v.guid for v in videos] == [inside.guid]
        assert len(resolver.all_videos()) == 2
