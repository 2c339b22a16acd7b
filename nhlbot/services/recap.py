#!/usr/bin/env python3
"""
Game recap assembly for the NHL Bot
Finds a highlight video for a finished game and extracts its three stars

The video lookup is an ordered list of named strategies. Each returns a
RecapVideo or None and the first hit wins; the search link strategy always
produces a result so a recap with game details always carries a video.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

from ..enums import RecapState
from ..models import GameRecap, RecapVideo, StarPlayer, TeamGame, localized
from ..clients.youtube_client import NHL_CHANNEL_ID

HIGHLIGHT_KEYWORDS = ('highlights', 'recap', 'condensed')
TRUSTED_CHANNELS = ('nhl', 'sportsnet', 'tsn', 'espn')

# Accepted publish window relative to game start, in days
PUBLISH_WINDOW_DAYS = (-1, 3)

YOUTUBE_WATCH_URL = 'https://www.youtube.com/watch?v={video_id}'
YOUTUBE_RESULTS_URL = 'https://www.youtube.com/results?search_query={query}'

logger = logging.getLogger(__name__)


@dataclass
class MatchupNames:
    """Team names used to build and validate highlight searches"""
    away_full: str
    home_full: str
    away_short: str
    home_short: str
    game_start: datetime

    @classmethod
    def for_game(cls, game: TeamGame, teams) -> "MatchupNames":
        return cls(
            away_full=teams.display_name(game.away_abbrev),
            home_full=teams.display_name(game.home_abbrev),
            away_short=teams.short_name(game.away_abbrev),
            home_short=teams.short_name(game.home_abbrev),
            game_start=game.start_time_utc or datetime.now(timezone.utc),
        )

    def query_phrasings(self) -> List[str]:
        return [
            f"{self.away_short} vs {self.home_short} highlights",
            f"{self.away_short} {self.home_short} highlights",
            f"{self.home_short} vs {self.away_short} highlights",
            f"{self.away_full} vs {self.home_full} highlights",
        ]

    def long_date(self) -> str:
        """'October 5, 2024' style date of the game"""
        start = self.game_start
        return f"{start.strftime('%B')} {start.day}, {start.year}"

    def search_query(self) -> str:
        return f"{self.away_short} vs {self.home_short} highlights {self.long_date()} NHL"

    def publish_window(self):
        """(publishedAfter, publishedBefore) covering game day through three days later"""
        game_day = self.game_start.astimezone(timezone.utc).date()
        after = datetime.combine(game_day, time.min, tzinfo=timezone.utc)
        before = datetime.combine(game_day + timedelta(days=3), time(23, 59, 59, 999000), tzinfo=timezone.utc)
        return after, before


def is_highlight_title(title: str) -> bool:
    title = title.lower()
    return any(keyword in title for keyword in HIGHLIGHT_KEYWORDS)


def names_both_teams(title: str, names: MatchupNames) -> bool:
    title = title.lower()
    has_away = names.away_short in title or names.away_full.lower() in title
    has_home = names.home_short in title or names.home_full.lower() in title
    return has_away and has_home


def is_trusted_channel(channel_title: str) -> bool:
    channel = channel_title.lower()
    return any(trusted in channel for trusted in TRUSTED_CHANNELS)


def published_in_window(published_at: Optional[str], game_start: datetime) -> bool:
    if not published_at:
        return False
    try:
        published = datetime.fromisoformat(published_at.replace('Z', '+00:00'))
    except ValueError:
        return False
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    diff_days = (published - game_start).total_seconds() / 86400
    return PUBLISH_WINDOW_DAYS[0] <= diff_days <= PUBLISH_WINDOW_DAYS[1]


def is_matching_video(item: Dict[str, Any], names: MatchupNames) -> bool:
    snippet = item.get('snippet') or {}
    title = snippet.get('title') or ''
    return (is_highlight_title(title)
            and names_both_teams(title, names)
            and is_trusted_channel(snippet.get('channelTitle') or '')
            and published_in_window(snippet.get('publishedAt'), names.game_start))


def embeddable_video(item: Dict[str, Any]) -> RecapVideo:
    snippet = item.get('snippet') or {}
    thumbnails = snippet.get('thumbnails') or {}
    return RecapVideo(
        state=RecapState.EMBEDDABLE,
        url=YOUTUBE_WATCH_URL.format(video_id=(item.get('id') or {}).get('videoId')),
        title=snippet.get('title') or '',
        channel_title=snippet.get('channelTitle'),
        thumbnail=(thumbnails.get('medium') or {}).get('url'),
        published_at=snippet.get('publishedAt'),
    )


def search_link_video(names: MatchupNames, no_video_found: bool = False) -> RecapVideo:
    query = names.search_query()
    return RecapVideo(
        state=RecapState.SEARCH,
        url=YOUTUBE_RESULTS_URL.format(query=quote_plus(query)),
        title=f"{names.away_full} vs {names.home_full} Highlights",
        search_query=query,
        no_video_found=no_video_found,
    )


def _player_name(data: Dict[str, Any]) -> Optional[str]:
    name = localized(data.get('name'))
    if name:
        return name
    first = localized(data.get('firstName'))
    last = localized(data.get('lastName'))
    if first and last:
        return f"{first} {last}"
    return None


def normalize_star(raw: Any) -> Optional[StarPlayer]:
    """Project one three-stars entry onto StarPlayer, or None for an unknown shape"""
    if isinstance(raw, str):
        return StarPlayer(name=raw) if raw.strip() else None
    if not isinstance(raw, dict):
        logger.debug(f"Skipping unrecognized three stars entry: {raw!r}")
        return None

    player = raw.get('player') if isinstance(raw.get('player'), dict) else {}
    name = _player_name(raw) or _player_name(player)
    if not name:
        logger.debug(f"Skipping unrecognized three stars entry: {raw!r}")
        return None

    team = raw.get('team') if isinstance(raw.get('team'), dict) else {}
    player_team = player.get('team') if isinstance(player.get('team'), dict) else {}
    team_abbrev = (raw.get('teamAbbrev') or team.get('abbrev') or raw.get('teamAbbreviation')
                   or player_team.get('abbrev') or '')
    return StarPlayer(name=name, team_abbrev=localized(team_abbrev))


def extract_three_stars(details: Optional[Dict[str, Any]]) -> List[StarPlayer]:
    """Three stars from a gamecenter landing payload (summary, top level or boxscore)"""
    if not details:
        return []
    summary = details.get('summary') or {}
    boxscore = details.get('boxscore') or {}
    raw_stars = summary.get('threeStars') or details.get('threeStars') or boxscore.get('threeStars') or []

    stars = []
    for raw in raw_stars:
        star = normalize_star(raw)
        if star:
            stars.append(star)
    return stars


class RecapFinder:
    """Runs the highlight video strategies for a finished game"""

    def __init__(self, youtube, teams, log: Optional[logging.Logger] = None):
        self.youtube = youtube
        self.teams = teams
        self.logger = log or logger
        self.strategies = [
            ('channel_highlights', self.find_highlight_video),
            ('search_link', self.build_search_link),
        ]

    async def find_video(self, game: TeamGame) -> RecapVideo:
        names = MatchupNames.for_game(game, self.teams)
        for name, strategy in self.strategies:
            try:
                video = await strategy(names)
            except Exception as e:
                self.logger.warning(f"Recap strategy '{name}' failed: {e}")
                continue
            if video is not None:
                self.logger.debug(f"Recap strategy '{name}' produced {video.state.value} result")
                return video
        return search_link_video(names)

    async def find_highlight_video(self, names: MatchupNames) -> Optional[RecapVideo]:
        if not self.youtube or not self.youtube.enabled:
            return None

        published_after, published_before = names.publish_window()
        for query in names.query_phrasings():
            try:
                items = await self.youtube.search(query, published_after, published_before,
                                                  channel_id=NHL_CHANNEL_ID)
                if not items:
                    items = await self.youtube.search(f"{query} NHL highlights", published_after,
                                                      published_before)
            except Exception as e:
                self.logger.warning(f"Highlight search failed for '{query}': {e}")
                continue

            for item in items:
                if is_matching_video(item, names):
                    return embeddable_video(item)
        return None

    async def build_search_link(self, names: MatchupNames) -> RecapVideo:
        # Reached with a key only after every phrasing came up empty or failed
        searched = bool(self.youtube and self.youtube.enabled)
        return search_link_video(names, no_video_found=searched)


async def assemble_recap(game: TeamGame, fetch_details, finder: RecapFinder,
                         log: Optional[logging.Logger] = None) -> GameRecap:
    """Combine game details, three stars and the video lookup into a GameRecap"""
    log = log or logger
    try:
        details = await fetch_details(game.game_id)
    except Exception as e:
        log.error(f"Error fetching game details for {game.game_id}: {e}")
        return GameRecap(game=game, details_available=False, stars=[], video=None)

    video = await finder.find_video(game)
    return GameRecap(game=game, details_available=True, stars=extract_three_stars(details), video=video)
