#!/usr/bin/env python3
"""
YouTube Data API search client
Used by the recap command to find highlight videos
"""

import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..http import HTTPClient

YOUTUBE_SEARCH_URL = 'https://www.googleapis.com/youtube/v3/search'

# Official NHL channel
NHL_CHANNEL_ID = 'UCqFii6I0kpYUaHV3t_dUOOg'


def _rfc3339(value: datetime) -> str:
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f"{value.microsecond // 1000:03d}Z"


class YouTubeSearchClient:
    """Video search; only usable when an API key is configured"""

    def __init__(self, http: HTTPClient, api_key: Optional[str] = None, url: str = YOUTUBE_SEARCH_URL,
                 max_results: int = 15):
        self.http = http
        self.api_key = api_key
        self.url = url
        self.max_results = max_results

    @classmethod
    def from_config(cls, http: HTTPClient, config) -> "YouTubeSearchClient":
        api_key = config.get('Recap', 'youtube_api_key', fallback='').strip()
        return cls(http, api_key=api_key or os.environ.get('YOUTUBE_API_KEY') or None)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def search(self, query: str, published_after: datetime, published_before: datetime,
                     channel_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Most recent videos matching query inside the publish window"""
        params = {
            'part': 'snippet',
            'q': query,
            'type': 'video',
            'order': 'date',
            'maxResults': self.max_results,
            'publishedAfter': _rfc3339(published_after),
            'publishedBefore': _rfc3339(published_before),
            'key': self.api_key,
        }
        if channel_id:
            params['channelId'] = channel_id
        data = await self.http.get_json(self.url, params=params)
        return (data or {}).get('items') or []
