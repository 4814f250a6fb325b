"""YouTube Data API client — aggregate subscriber count for the ReGLOSS channels.

One channels.list request covers every channel; the API key is passed as a
query parameter, no OAuth involved.
"""

import logging
from dataclasses import dataclass

import httpx

from errors import MissingAPIKeyError, StatisticsUnavailableError

logger = logging.getLogger(__name__)

CHANNELS_ENDPOINT = "https://www.googleapis.com/youtube/v3/channels"


@dataclass(frozen=True)
class Channel:
    id: str
    name: str
    avatar: str
    url: str


CHANNELS = (
    Channel(
        id="UCMGfV7TVTmHhEErVJg1oHBQ",
        name="Hiodoshi Ao",
        avatar="https://yt3.googleusercontent.com/-D2Cf4dIQGO_CcY_1F9i63TcHyY0EuPV1pYskJQmQHIClJGOt34BoI84zlgje_THCw8AprB6=s176-c-k-c0x00ffffff-no-rj",
        url="https://www.youtube.com/@HiodoshiAo",
    ),
    Channel(
        id="UCWQtYtq9EOB4-I5P-3fh8lA",
        name="Otonose Kanade",
        avatar="https://yt3.googleusercontent.com/o03i3rWw98BSquRZFhyiDQuunr1cr_9xEBVNNx3Cq8vqlJZVKXMgKsVLGW2AlbsFTvphGiHRCg0=s176-c-k-c0x00ffffff-no-rj",
        url="https://www.youtube.com/@OtonoseKanade",
    ),
    Channel(
        id="UCtyWhCj3AqKh2dXctLkDtng",
        name="Ichijou Ririka",
        avatar="https://yt3.googleusercontent.com/TQwdYxMCQYmBQskSxmdAbfAqRR__ROlB-mFGlCFqLF4C-6vHpjYkWj9GbnlKOoOTaOMssRGw=s176-c-k-c0x00ffffff-no-rj",
        url="https://www.youtube.com/@IchijouRirika",
    ),
    Channel(
        id="UCdXAk5MpyLD8594lm_OvtGQ",
        name="Juufuutei Raden",
        avatar="https://yt3.googleusercontent.com/MrOx47-A0RkLxHN5Wh8stc3SYfbPGNHdJY9AnjD5mRkuKYVeYjxlBSnzKHtqTjDQ3Lm_MRCjcA=s176-c-k-c0x00ffffff-no-rj",
        url="https://www.youtube.com/@JuufuuteiRaden",
    ),
    Channel(
        id="UC1iA6_NT4mtAcIII6ygrvCw",
        name="Todoroki Hajime",
        avatar="https://yt3.googleusercontent.com/vMM_SKbkipyDVJkUYPPWlQkgThE1rXMSh7hkhqvC_Qs-iTigfyKW23OfLH5U1HFTZIcsHR2Z=s176-c-k-c0x00ffffff-no-rj",
        url="https://www.youtube.com/@TodorokiHajime",
    ),
)


def _subscriber_count(item: dict) -> int:
    """Subscriber count of one channels.list item; 0 when hidden or malformed."""
    statistics = item.get("statistics")
    if not isinstance(statistics, dict):
        return 0
    raw = statistics.get("subscriberCount")
    try:
        count = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def sum_subscribers(payload: dict) -> int:
    """Sum subscriber counts across a channels.list response."""
    items = payload.get("items")
    if not isinstance(items, list):
        return 0
    return sum(_subscriber_count(item) for item in items if isinstance(item, dict))


class YouTubeCountSource:
    """Fetch the combined subscriber count for a fixed set of channels."""

    def __init__(
        self,
        api_key: str | None,
        channel_ids: list[str] | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._channel_ids = channel_ids or [c.id for c in CHANNELS]
        self._client = client

    async def fetch_total(self) -> int:
        if not self._api_key:
            raise MissingAPIKeyError()

        params = {
            "part": "statistics",
            "id": ",".join(self._channel_ids),
            "key": self._api_key,
        }
        try:
            if self._client is not None:
                resp = await self._client.get(CHANNELS_ENDPOINT, params=params)
            else:
                async with httpx.AsyncClient() as client:
                    resp = await client.get(CHANNELS_ENDPOINT, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as e:
            # str(e) embeds the request URL, which carries the API key
            if isinstance(e, httpx.HTTPStatusError):
                reason = f"HTTP {e.response.status_code}"
            else:
                reason = type(e).__name__
            logger.error("YouTube channels.list failed: %s", reason)
            raise StatisticsUnavailableError(reason) from e
        except ValueError as e:
            logger.error("YouTube channels.list returned invalid JSON: %s", e)
            raise StatisticsUnavailableError("invalid JSON response") from e

        if not isinstance(payload, dict):
            raise StatisticsUnavailableError("unexpected response shape")

        total = sum_subscribers(payload)
        logger.info("Fetched subscriber total for %d channels: %d", len(self._channel_ids), total)
        return total
