#!/usr/bin/env python3
"""
Season helpers for the NHL Bot
Season ids, display strings and the backward season walk used by the
past-games commands

Season ids encode both calendar years, e.g. 20242025 for the 2024-25 season.
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

MAX_SEASON_STEPS = 10

# First month of a new season (July-December belong to the season starting that year)
SEASON_START_MONTH = 7

logger = logging.getLogger(__name__)


def season_id(start_year: int) -> int:
    return start_year * 10000 + start_year + 1


def current_season(now: Optional[datetime] = None) -> int:
    """Get the current season id"""
    now = now or datetime.now()
    if now.month >= SEASON_START_MONTH:
        return season_id(now.year)
    return season_id(now.year - 1)


def previous_season(season: int) -> int:
    return season - 10001


def season_years(season: int) -> Tuple[int, int]:
    return season // 10000, season % 10000


def display_season(season: int) -> str:
    """Format a season id for display (20242025 -> '2024-25')"""
    start, end = season_years(season)
    return f"{start}-{end % 100:02d}"


def playoff_start_season(now: Optional[datetime] = None) -> int:
    """Season to start a playoff lookup from.

    Outside the May-August window the current season's playoffs have not
    plausibly started, so the lookup starts at the last completed playoffs.
    """
    now = now or datetime.now()
    season = current_season(now)
    if now.month >= 9 or now.month <= 4:
        season = previous_season(season)
    return season


async def collect_past_games(fetch_season: Callable[[int], Awaitable[Optional[Sequence]]],
                             requested_count: int, is_playoffs: bool = False,
                             now: Optional[datetime] = None, log: Optional[logging.Logger] = None) -> List:
    """Walk backward through seasons until requested_count games are collected.

    fetch_season(season) returns that season's games already filtered to the
    requested game type and sorted most recent first. A failed or empty season
    counts as zero games. At most MAX_SEASON_STEPS seasons are tried.
    """
    log = log or logger
    if requested_count <= 0:
        return []

    season = playoff_start_season(now) if is_playoffs else current_season(now)
    games = []
    steps = 0

    while len(games) < requested_count and steps < MAX_SEASON_STEPS:
        try:
            season_games = await fetch_season(season)
        except Exception as e:
            log.debug(f"No games for season {season}: {e}")
            season_games = None

        if season_games:
            label = display_season(season)
            for game in season_games:
                game.season = season
                game.season_display = label
                games.append(game)

        season = previous_season(season)
        steps += 1

    return games[:requested_count]


def group_by_season(games: Sequence) -> List[Tuple[str, List]]:
    """[(season_display, games)] in first-seen order, as tagged by collect_past_games"""
    groups: List[Tuple[str, List]] = []
    for game in games:
        label = getattr(game, 'season_display', None) or ''
        if not groups or groups[-1][0] != label:
            groups.append((label, []))
        groups[-1][1].append(game)
    return groups
