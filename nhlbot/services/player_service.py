#!/usr/bin/env python3
"""
Player data service for the NHL Bot
Player search, season and career totals, and game-log history
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..enums import GameType
from ..models import PlayerCandidate, PlayerCareerLine, PlayerGameLine, PlayerProfile, PlayerSeasonLine, SeasonStats, localized
from ..players import is_active_nhl_player, is_confident, rank_candidates, split_query
from ..seasons import collect_past_games, current_season

STATS_FANOUT = 8
CAREER_FANOUT = 10
MAX_RESULTS = 5


def current_nhl_totals(landing: Optional[Dict[str, Any]], season: int) -> Optional[Dict[str, Any]]:
    """This season's NHL row from a landing payload's seasonTotals"""
    for row in (landing or {}).get('seasonTotals') or []:
        if row.get('season') == season and row.get('leagueAbbrev') == 'NHL':
            return row
    return None


def nhl_career_totals(landing: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Regular season career totals, only for players with at least one NHL season"""
    landing = landing or {}
    has_nhl_season = any(row.get('leagueAbbrev') == 'NHL' for row in landing.get('seasonTotals') or [])
    career = (landing.get('careerTotals') or {}).get('regularSeason')
    if has_nhl_season and career:
        return career
    return None


class PlayerService:
    """Assembles player-level results from the search and web APIs"""

    def __init__(self, nhl_client, search_client, teams, logger: Optional[logging.Logger] = None):
        self.nhl = nhl_client
        self.search = search_client
        self.teams = teams
        self.logger = logger or logging.getLogger(__name__)

    async def _candidates(self, query: str, active_only: bool = True, prefer_active: bool = False) -> List[PlayerCandidate]:
        tokens = split_query(query)
        if not tokens:
            return []
        raw = await self.search.search_players(' '.join(tokens))
        return rank_candidates(raw, tokens, self.teams, active_only=active_only, prefer_active=prefer_active)

    async def search_player(self, query: str) -> Optional[PlayerProfile]:
        """Best active NHL match for the query, with position and team from the landing feed"""
        candidates = await self._candidates(query)
        if not candidates:
            return None

        best = candidates[0]
        landing = await self.nhl.player_landing(best.player_id) or {}
        team = landing.get('currentTeamAbbrev')
        return PlayerProfile(
            player_id=best.player_id,
            name=best.name,
            position=landing.get('position') or 'N/A',
            team=team or 'N/A',
            team_name=self.teams.team_name(team) if is_active_nhl_player(landing, self.teams) else None,
            score=best.score,
        )

    async def _season_line(self, candidate: PlayerCandidate, season: int) -> Optional[PlayerSeasonLine]:
        landing = await self.nhl.player_landing(candidate.player_id)
        totals = current_nhl_totals(landing, season)
        if not totals:
            return None
        return PlayerSeasonLine(
            name=candidate.name,
            player_id=candidate.player_id,
            team=landing.get('currentTeamAbbrev') or 'N/A',
            position=landing.get('position') or 'N/A',
            stats=SeasonStats.from_api(totals),
            season=season,
            score=candidate.score,
        )

    async def _career_line(self, candidate: PlayerCandidate) -> Optional[PlayerCareerLine]:
        landing = await self.nhl.player_landing(candidate.player_id)
        career = nhl_career_totals(landing)
        if not career:
            return None
        return PlayerCareerLine(
            name=candidate.name,
            player_id=candidate.player_id,
            team=landing.get('currentTeamAbbrev') or 'N/A',
            position=landing.get('position') or 'N/A',
            stats=SeasonStats.from_api(career),
            score=candidate.score,
            is_active=candidate.is_active_nhl,
            birth_date=landing.get('birthDate'),
            birth_city=localized(landing.get('birthCity')) or None,
            birth_country=landing.get('birthCountry'),
        )

    async def _fan_out(self, candidates: List[PlayerCandidate], fetch) -> List:
        """Fetch every candidate concurrently; a failing candidate is skipped"""
        async def safe_fetch(candidate):
            try:
                return await fetch(candidate)
            except Exception as e:
                self.logger.warning(f"Error fetching stats for player {candidate.player_id}: {e}")
                return None

        results = await asyncio.gather(*(safe_fetch(c) for c in candidates))
        return [r for r in results if r is not None]

    async def get_player_stats(self, query: str, now: Optional[datetime] = None) -> List[PlayerSeasonLine]:
        """Current-season NHL totals for the best matching active players"""
        tokens = split_query(query)
        candidates = await self._candidates(query)
        if not candidates:
            return []

        season = current_season(now)
        if is_confident(candidates, tokens):
            line = await self._season_line(candidates[0], season)
            if line:
                return [line]

        lines = await self._fan_out(candidates[:STATS_FANOUT], lambda c: self._season_line(c, season))
        lines.sort(key=lambda line: -line.score)
        return lines[:MAX_RESULTS]

    async def get_player_career_stats(self, query: str) -> List[PlayerCareerLine]:
        """Regular season career totals; active NHL players rank ahead of retired ones"""
        tokens = split_query(query)
        candidates = await self._candidates(query, active_only=False, prefer_active=True)
        if not candidates:
            return []

        if is_confident(candidates, tokens):
            line = await self._career_line(candidates[0])
            if line:
                return [line]

        lines = await self._fan_out(candidates[:CAREER_FANOUT], self._career_line)
        lines.sort(key=lambda line: (not line.is_active, -line.score))
        return lines[:MAX_RESULTS]

    async def get_player_past_games(self, player_id: int, count: int, is_playoffs: bool = False,
                                    now: Optional[datetime] = None) -> List[PlayerGameLine]:
        """Last `count` game-log rows of the requested type, walking back through seasons"""
        game_type = GameType.for_request(is_playoffs)

        async def fetch_season(season: int) -> List[PlayerGameLine]:
            rows = await self.nhl.player_game_log(player_id, season, game_type.value)
            return [PlayerGameLine.from_api(row) for row in rows]

        return await collect_past_games(fetch_season, count, is_playoffs, now=now, log=self.logger)
