"""Tests for the YouTube count source."""

import httpx
import pytest

from errors import MissingAPIKeyError, StatisticsUnavailableError
from services.youtube import CHANNELS, CHANNELS_ENDPOINT, YouTubeCountSource, sum_subscribers


def _items(*counts) -> dict:
    items = []
    for count in counts:
        statistics = {"viewCount": "1000"}
        if count is not None:
            statistics["subscriberCount"] = count
        items.append({"kind": "youtube#channel", "statistics": statistics})
    return {"kind": "youtube#channelListResponse", "items": items}


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestSumSubscribers:
    def test_sums_string_counts(self) -> None:
        assert sum_subscribers(_items("500000", "500000", "200000", "0", "0")) == 1_200_000

    def test_absent_count_contributes_zero(self) -> None:
        assert sum_subscribers(_items("100", None, "50")) == 150

    def test_non_numeric_count_contributes_zero(self) -> None:
        assert sum_subscribers(_items("100", "lots", "1.5e6")) == 100

    def test_missing_statistics_contributes_zero(self) -> None:
        assert sum_subscribers({"items": [{"kind": "youtube#channel"}, {"statistics": {"subscriberCount": "7"}}]}) == 7

    def test_missing_items_is_zero(self) -> None:
        assert sum_subscribers({"kind": "youtube#channelListResponse"}) == 0

    def test_non_dict_statistics_contributes_zero(self) -> None:
        payload = {"items": [{"statistics": "hidden"}, {"statistics": ["1"]}, {"statistics": {"subscriberCount": "7"}}]}

        assert sum_subscribers(payload) == 7

    @pytest.mark.parametrize("items", [5, "items", {"statistics": {"subscriberCount": "7"}}])
    def test_non_list_items_is_zero(self, items) -> None:
        assert sum_subscribers({"items": items}) == 0

    async def test_malformed_statistics_do_not_fail_fetch(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"items": [{"statistics": "hidden"}, {"statistics": {"subscriberCount": "9"}}]})

        async with _client(handler) as client:
            source = YouTubeCountSource(api_key="k", client=client)
            assert await source.fetch_total() == 9


class TestFetchTotal:
    async def test_requests_statistics_for_all_channels(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_items("1", "2", "3", "4", "5"))

        async with _client(handler) as client:
            source = YouTubeCountSource(api_key="test-key", client=client)
            total = await source.fetch_total()

        assert total == 15
        assert len(seen) == 1
        request = seen[0]
        assert str(request.url).startswith(CHANNELS_ENDPOINT)
        assert request.url.params["part"] == "statistics"
        assert request.url.params["key"] == "test-key"
        assert request.url.params["id"].split(",") == [c.id for c in CHANNELS]

    async def test_custom_channel_ids(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["id"] == "UC1,UC2"
            return httpx.Response(200, json=_items("10", "20"))

        async with _client(handler) as client:
            source = YouTubeCountSource(api_key="k", channel_ids=["UC1", "UC2"], client=client)
            assert await source.fetch_total() == 30

    async def test_http_error_raises_without_leaking_key(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"message": "quotaExceeded"}})

        async with _client(handler) as client:
            source = YouTubeCountSource(api_key="secret-key", client=client)
            with pytest.raises(StatisticsUnavailableError) as exc_info:
                await source.fetch_total()

        assert exc_info.value.status_code == 502
        assert "HTTP 403" in str(exc_info.value)
        assert "secret-key" not in str(exc_info.value)

    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            source = YouTubeCountSource(api_key="k", client=client)
            with pytest.raises(StatisticsUnavailableError):
                await source.fetch_total()

    async def test_invalid_json_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        async with _client(handler) as client:
            source = YouTubeCountSource(api_key="k", client=client)
            with pytest.raises(StatisticsUnavailableError):
                await source.fetch_total()

    async def test_missing_api_key_raises_before_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async with _client(handler) as client:
            source = YouTubeCountSource(api_key=None, client=client)
            with pytest.raises(MissingAPIKeyError):
                await source.fetch_total()


def test_channel_roster_is_fixed() -> None:
    assert len(CHANNELS) == 5
    assert [c.name for c in CHANNELS] == [
        "Hiodoshi Ao",
        "Otonose Kanade",
        "Ichijou Ririka",
        "Juufuutei Raden",
        "Todoroki Hajime",
    ]
    assert all(c.url.startswith("https://www.youtube.com/@") for c in CHANNELS)
