#!/usr/bin/env python3
"""
NHL web API clients
Schedule, standings, gamecenter and player endpoints plus the player search
"""

from typing import Any, Dict, List, Union

from ..http import HTTPClient

NHL_WEB_BASE_URL = 'https://api-web.nhle.com/v1'
NHL_SEARCH_URL = 'https://search.d3.nhle.com/api/v1/search/player'


class NHLWebClient:
    """Client for api-web.nhle.com"""

    def __init__(self, http: HTTPClient, base_url: str = NHL_WEB_BASE_URL):
        self.http = http
        self.base_url = base_url.rstrip('/')

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    async def club_schedule(self, abbr: str, season: Union[int, str] = 'now') -> List[Dict[str, Any]]:
        """Raw game entries of a club's season schedule ('now' for the current one)"""
        data = await self.http.get_json(self._url(f"club-schedule-season/{abbr}/{season}"))
        return (data or {}).get('games') or []

    async def standings(self) -> List[Dict[str, Any]]:
        data = await self.http.get_json(self._url('standings/now'))
        return (data or {}).get('standings') or []

    async def game_landing(self, game_id: int) -> Dict[str, Any]:
        return await self.http.get_json(self._url(f"gamecenter/{game_id}/landing"))

    async def player_landing(self, player_id: int) -> Dict[str, Any]:
        return await self.http.get_json(self._url(f"player/{player_id}/landing"))

    async def player_game_log(self, player_id: int, season: int, game_type: int) -> List[Dict[str, Any]]:
        data = await self.http.get_json(self._url(f"player/{player_id}/game-log/{season}/{game_type}"))
        return (data or {}).get('gameLog') or []


class NHLSearchClient:
    """Client for the NHL player search service"""

    def __init__(self, http: HTTPClient, url: str = NHL_SEARCH_URL, limit: int = 50):
        self.http = http
        self.url = url
        self.limit = limit

    async def search_players(self, query: str) -> List[Dict[str, Any]]:
        params = {'culture': 'en-us', 'limit': self.limit, 'q': query}
        data = await self.http.get_json(self.url, params=params)
        return data if isinstance(data, list) else []
