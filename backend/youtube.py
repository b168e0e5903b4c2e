import os
from typing import Any, Dict, List, Optional

import requests

from config import YOUTUBE_TIMEOUT_SECONDS
from errors import ProviderConfigError, ProviderError
from logging_config import get_logger

logger = get_logger("icy", component="youtube")

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
MAX_SEARCH_RESULTS = 50  # YouTube's own cap for search.list


class YouTubeClient:
    """
    Thin client for the two YouTube Data API v3 calls discovery needs.
    API Docs: https://developers.google.com/youtube/v3/docs
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = YOUTUBE_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key or os.getenv("YOUTUBE_API_KEY")
        if not self.api_key:
            raise ProviderConfigError("YouTube", "YOUTUBE_API_KEY")

        self.session = session or requests.Session()
        self.timeout = timeout
        self.base_url = YOUTUBE_API_BASE

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        params = {**params, "key": self.api_key}
        try:
            response = self.session.get(f"{self.base_url}/{path}", params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error("YouTube API timeout", extra={"path": path})
            raise ProviderError("YouTube", "request timeout") from e
        except requests.exceptions.RequestException as e:
            logger.error("YouTube API request failed", extra={"path": path, "error": str(e)})
            raise ProviderError("YouTube", str(e)) from e

        if response.status_code != 200:
            logger.error(
                "YouTube API error",
                extra={"path": path, "status_code": response.status_code, "body": response.text[:500]},
            )
            raise ProviderError("YouTube", f"{response.status_code} - {response.text[:200]}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error("YouTube API returned invalid JSON", extra={"path": path, "body": response.text[:500]})
            raise ProviderError("YouTube", "invalid JSON response") from e

        if not isinstance(data, dict):
            raise ProviderError("YouTube", "unexpected response payload")
        return data

    def search_channel_ids(self, query: str, max_results: int) -> List[str]:
        data = self._get(
            "search",
            {
                "part": "snippet",
                "type": "channel",
                "q": query,
                "maxResults": max(1, min(max_results, MAX_SEARCH_RESULTS)),
            },
        )
        ids = []
        for item in data.get("items") or []:
            channel_id = (item.get("id") or {}).get("channelId")
            if channel_id:
                ids.append(channel_id)
        return ids

    def get_channels(self, channel_ids: List[str]) -> List[Dict[str, Any]]:
        """Snippet + statistics for a batch of channels, one request."""
        if not channel_ids:
            return []
        data = self._get(
            "channels",
            {"part": "snippet,statistics", "id": ",".join(channel_ids)},
        )
        return data.get("items") or []
