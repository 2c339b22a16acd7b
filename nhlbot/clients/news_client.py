#!/usr/bin/env python3
"""
Hockey news RSS client
"""

from ..http import HTTPClient

NEWS_BASE_URL = 'https://www.prohockeyrumors.com'


class NewsFeedClient:

    def __init__(self, http: HTTPClient, base_url: str = NEWS_BASE_URL):
        self.http = http
        self.base_url = base_url.rstrip('/')

    async def fetch_league_feed(self) -> str:
        return await self.http.get_text(f"{self.base_url}/feed")

    async def fetch_team_feed(self, slug: str) -> str:
        return await self.http.get_text(f"{self.base_url}/category/{slug}/feed")
