#!/usr/bin/env python3
"""
Team data service for the NHL Bot
Schedules, standings, multi-season game history and recaps for one club
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..enums import COMPLETED_GAME_STATES, GameType
from ..models import GameRecap, StandingRow, TeamGame
from ..seasons import collect_past_games
from .recap import RecapFinder, assemble_recap


class TeamService:
    """Assembles club-level results from the NHL web API"""

    def __init__(self, nhl_client, teams, recap_finder: Optional[RecapFinder] = None,
                 logger: Optional[logging.Logger] = None):
        self.nhl = nhl_client
        self.teams = teams
        self.recap_finder = recap_finder
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _now(now: Optional[datetime] = None) -> datetime:
        return now or datetime.now(timezone.utc)

    async def get_current_schedule(self, abbr: str) -> List[TeamGame]:
        raw_games = await self.nhl.club_schedule(abbr, 'now')
        return [TeamGame.from_api(raw) for raw in raw_games]

    async def get_upcoming_games(self, abbr: str, limit: int = 5, now: Optional[datetime] = None) -> List[TeamGame]:
        now = self._now(now)
        games = await self.get_current_schedule(abbr)
        upcoming = [g for g in games if g.start_time_utc and g.start_time_utc >= now]
        return upcoming[:limit]

    async def get_next_game(self, abbr: str, now: Optional[datetime] = None) -> Optional[TeamGame]:
        upcoming = await self.get_upcoming_games(abbr, limit=1, now=now)
        return upcoming[0] if upcoming else None

    async def get_previous_game(self, abbr: str, now: Optional[datetime] = None) -> Optional[TeamGame]:
        """Most recent finished game in the current schedule"""
        now = self._now(now)
        games = await self.get_current_schedule(abbr)
        past = [g for g in games
                if g.start_time_utc and g.start_time_utc < now and g.game_state == 'OFF']
        return past[-1] if past else None

    async def get_standings(self) -> List[StandingRow]:
        rows = await self.nhl.standings()
        return [StandingRow.from_api(row) for row in rows]

    async def get_team_stats(self, abbr: str) -> Optional[StandingRow]:
        for row in await self.get_standings():
            if row.abbrev == abbr:
                return row
        return None

    @staticmethod
    def _by_points(rows: List[StandingRow]) -> List[StandingRow]:
        return sorted(rows, key=lambda r: (-r.points, -r.point_pctg))

    async def division_standings(self, abbr: str) -> List[StandingRow]:
        rows = await self.get_standings()
        team_row = next((r for r in rows if r.abbrev == abbr), None)
        if not team_row or not team_row.division_name:
            return []
        return self._by_points([r for r in rows if r.division_name == team_row.division_name])

    async def conference_standings(self, abbr: str) -> List[StandingRow]:
        rows = await self.get_standings()
        team_row = next((r for r in rows if r.abbrev == abbr), None)
        if not team_row or not team_row.conference_name:
            return []
        return self._by_points([r for r in rows if r.conference_name == team_row.conference_name])

    async def league_standings(self) -> List[StandingRow]:
        return self._by_points(await self.get_standings())

    async def get_team_past_games(self, abbr: str, count: int, is_playoffs: bool = False,
                                  now: Optional[datetime] = None) -> List[TeamGame]:
        """Last `count` completed games of the requested type, walking back through seasons"""
        game_type = GameType.for_request(is_playoffs)

        async def fetch_season(season: int) -> List[TeamGame]:
            raw_games = await self.nhl.club_schedule(abbr, season)
            games = [TeamGame.from_api(raw) for raw in raw_games]
            games = [g for g in games
                     if g.game_type is game_type and g.game_state in COMPLETED_GAME_STATES]
            games.sort(key=lambda g: g.start_time_utc or datetime.min.replace(tzinfo=timezone.utc),
                       reverse=True)
            return games

        return await collect_past_games(fetch_season, count, is_playoffs, now=now, log=self.logger)

    async def get_game_recap(self, abbr: str, now: Optional[datetime] = None) -> Optional[GameRecap]:
        game = await self.get_previous_game(abbr, now=now)
        if not game:
            return None
        finder = self.recap_finder or RecapFinder(None, self.teams, log=self.logger)
        return await assemble_recap(game, self.nhl.game_landing, finder, log=self.logger)
