#!/usr/bin/env python3
"""
ESPN injuries feed client
"""

from typing import Any, Dict

from ..http import HTTPClient

ESPN_INJURIES_URL = 'https://site.api.espn.com/apis/site/v2/sports/hockey/nhl/injuries'


class ESPNInjuriesClient:

    def __init__(self, http: HTTPClient, url: str = ESPN_INJURIES_URL):
        self.http = http
        self.url = url

    async def fetch_injuries(self) -> Dict[str, Any]:
        """League-wide injuries payload: {'injuries': [{'displayName': ..., 'injuries': [...]}]}"""
        return await self.http.get_json(self.url)
