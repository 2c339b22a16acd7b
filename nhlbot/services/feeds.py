#!/usr/bin/env python3
"""
Injury and news feeds for the NHL Bot
League-wide payloads are cached; team views are derived from them
"""

import html
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import feedparser

from ..cache import TTLCache
from ..exceptions import UpstreamUnavailable
from ..models import InjuryEntry, NewsItem

TAG_RE = re.compile(r'<[^>]*>')
WHITESPACE_RE = re.compile(r'\s+')


def clean_html(text: Optional[str]) -> str:
    """Strip tags, decode entities and collapse whitespace"""
    if not text:
        return ''
    text = TAG_RE.sub('', text)
    text = html.unescape(text).replace('\xa0', ' ')
    return WHITESPACE_RE.sub(' ', text).strip()


def _published(entry) -> Optional[datetime]:
    parsed = entry.get('published_parsed')
    if not parsed:
        return None
    try:
        return datetime(*parsed[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return None


def parse_rss(xml_text: str) -> List[NewsItem]:
    """Parse feed entries into NewsItems (entries without title or link are skipped)"""
    parsed = feedparser.parse(xml_text or '')
    if parsed.bozo and not parsed.entries:
        raise UpstreamUnavailable(f"Invalid RSS feed: {parsed.get('bozo_exception')}")

    items = []
    for entry in parsed.entries:
        title = entry.get('title')
        link = entry.get('link')
        if not title or not link:
            continue
        items.append(NewsItem(
            title=clean_html(title),
            link=link.strip(),
            description=clean_html(entry.get('description')),
            published=_published(entry),
        ))
    return items


class InjuryService:
    """League injury report from ESPN, cached"""

    def __init__(self, client, cache: TTLCache, logger: Optional[logging.Logger] = None):
        self.client = client
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    async def get_injuries(self) -> Dict[str, Any]:
        return await self.cache.get_or_fetch(self.client.fetch_injuries)

    async def team_injuries(self, team_name: str) -> List[InjuryEntry]:
        """Injuries for the club whose ESPN displayName equals team_name"""
        data = await self.get_injuries()
        for team in (data or {}).get('injuries') or []:
            if team.get('displayName') == team_name:
                return [InjuryEntry.from_api(raw, team_name) for raw in team.get('injuries') or []]
        return []

    async def search_player_injury(self, query: str) -> List[InjuryEntry]:
        """Injuries whose player name contains the query (case-insensitive)"""
        needle = (query or '').strip().lower()
        if not needle:
            return []
        data = await self.get_injuries()
        matches = []
        for team in (data or {}).get('injuries') or []:
            team_name = team.get('displayName') or 'Unknown'
            for raw in team.get('injuries') or []:
                name = ((raw.get('athlete') or {}).get('displayName') or '').lower()
                if needle in name:
                    matches.append(InjuryEntry.from_api(raw, team_name))
        return matches


class NewsService:
    """Hockey news RSS, league feed cached"""

    def __init__(self, client, cache: TTLCache, teams, logger: Optional[logging.Logger] = None):
        self.client = client
        self.cache = cache
        self.teams = teams
        self.logger = logger or logging.getLogger(__name__)

    async def _fetch_league_news(self) -> List[NewsItem]:
        return parse_rss(await self.client.fetch_league_feed())

    async def get_news(self) -> List[NewsItem]:
        return await self.cache.get_or_fetch(self._fetch_league_news)

    def filter_news_for_team(self, items: List[NewsItem], abbr: str) -> List[NewsItem]:
        """League items whose title mentions one of the club's search keywords"""
        keywords = self.teams.search_keywords(abbr)
        if not items or not keywords:
            return []
        pattern = re.compile('|'.join(re.escape(k) for k in keywords), re.IGNORECASE)
        return [item for item in items if pattern.search(item.title or '')]

    async def get_team_news(self, abbr: str) -> List[NewsItem]:
        """Team category feed, falling back to filtering the league feed"""
        slug = self.teams.rss_slug(abbr)
        if slug:
            try:
                team_items = parse_rss(await self.client.fetch_team_feed(slug))
                if team_items:
                    return team_items
            except UpstreamUnavailable as e:
                self.logger.warning(f"Team news feed for {abbr} failed, filtering league feed: {e}")

        return self.filter_news_for_team(await self.get_news(), abbr)
