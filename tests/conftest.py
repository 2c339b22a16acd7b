"""
Shared fixtures for the NHL Bot tests
Remote feeds are replaced by small fake clients; nothing touches the network
"""

import configparser
import logging
from datetime import datetime, timezone

import pytest
import pytz

from nhlbot.cache import FeedCaches
from nhlbot.command_manager import CommandManager
from nhlbot.core import DEFAULT_CONFIG
from nhlbot.models import MeshMessage
from nhlbot.services import InjuryService, NewsService, PlayerService, RecapFinder, TeamService
from nhlbot.teams import TeamDirectory

# Mid-season reference time used across tests (season 2024-25)
NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def schedule_game(game_id, start, home, away, home_score=None, away_score=None,
                  state='OFF', game_type=2, last_period='REG'):
    """Club schedule entry shaped like the NHL web API"""
    return {
        'id': game_id,
        'gameType': game_type,
        'gameState': state,
        'startTimeUTC': start,
        'homeTeam': {'abbrev': home, 'score': home_score, 'placeName': {'default': home}},
        'awayTeam': {'abbrev': away, 'score': away_score, 'placeName': {'default': away}},
        'gameOutcome': {'lastPeriodType': last_period},
    }


class FakeNHLClient:
    """Stands in for NHLWebClient; schedules keyed by (abbr, season)"""

    def __init__(self, schedules=None, standings=None, landings=None, game_logs=None, game_details=None):
        self.schedules = schedules or {}
        self.standings_rows = standings or []
        self.landings = landings or {}
        self.game_logs = game_logs or {}
        self.game_details = game_details or {}
        self.calls = []

    async def club_schedule(self, abbr, season='now'):
        self.calls.append(('club_schedule', abbr, season))
        result = self.schedules.get((abbr, season), [])
        if isinstance(result, Exception):
            raise result
        return result

    async def standings(self):
        self.calls.append(('standings',))
        return self.standings_rows

    async def game_landing(self, game_id):
        self.calls.append(('game_landing', game_id))
        result = self.game_details.get(game_id, {})
        if isinstance(result, Exception):
            raise result
        return result

    async def player_landing(self, player_id):
        self.calls.append(('player_landing', player_id))
        result = self.landings.get(player_id, {})
        if isinstance(result, Exception):
            raise result
        return result

    async def player_game_log(self, player_id, season, game_type):
        self.calls.append(('player_game_log', player_id, season, game_type))
        result = self.game_logs.get((player_id, season, game_type), [])
        if isinstance(result, Exception):
            raise result
        return result


class FakeSearchClient:
    def __init__(self, results=None):
        self.results = results or []
        self.queries = []

    async def search_players(self, query):
        self.queries.append(query)
        return self.results


class FakeInjuriesClient:
    def __init__(self, payload=None):
        self.payload = payload if payload is not None else {'injuries': []}
        self.calls = 0

    async def fetch_injuries(self):
        self.calls += 1
        return self.payload


class FakeNewsClient:
    def __init__(self, league_xml='', team_feeds=None):
        self.league_xml = league_xml
        self.team_feeds = team_feeds or {}
        self.league_calls = 0

    async def fetch_league_feed(self):
        self.league_calls += 1
        return self.league_xml

    async def fetch_team_feed(self, slug):
        result = self.team_feeds.get(slug, '<rss><channel></channel></rss>')
        if isinstance(result, Exception):
            raise result
        return result


def rss(*items):
    """Minimal RSS 2.0 document from (title, link, description, pubDate) tuples"""
    body = ''.join(
        f"<item><title>{title}</title><link>{link}</link>"
        f"<description><![CDATA[{description}]]></description><pubDate>{pub_date}</pubDate></item>"
        for title, link, description, pub_date in items
    )
    return f'<?xml version="1.0"?><rss version="2.0"><channel><title>Feed</title>{body}</channel></rss>'


class FakeBot:
    """Just enough of NHLBot for commands and the command manager"""

    def __init__(self, nhl_client=None, search_client=None, injuries_client=None, news_client=None):
        self.config = configparser.ConfigParser()
        self.config.read_string(DEFAULT_CONFIG)
        self.config.set('Bot', 'message_delay_seconds', '0')
        self.logger = logging.getLogger('NHLBot.tests')
        self.timezone = pytz.utc
        self.connected = True
        self.meshcore = None

        self.teams = TeamDirectory()
        self.nhl_client = nhl_client or FakeNHLClient()
        self.search_client = search_client or FakeSearchClient()
        self.caches = FeedCaches()
        self.recap_finder = RecapFinder(None, self.teams, log=self.logger)
        self.team_service = TeamService(self.nhl_client, self.teams, self.recap_finder, logger=self.logger)
        self.player_service = PlayerService(self.nhl_client, self.search_client, self.teams, logger=self.logger)
        self.injury_service = InjuryService(injuries_client or FakeInjuriesClient(), self.caches.injuries,
                                            logger=self.logger)
        self.news_service = NewsService(news_client or FakeNewsClient(rss()), self.caches.news, self.teams,
                                        logger=self.logger)

        self.sent = []
        self.command_manager = CommandManager(self)

        async def record_send(message, content):
            self.sent.append(content)
            return True

        # Capture chunks instead of talking to a radio
        self.command_manager._send_one = record_send

    @property
    def reply(self) -> str:
        """All chunks sent so far, joined back together without continuation markers"""
        parts = []
        for chunk in self.sent:
            if chunk.startswith('...\n'):
                chunk = chunk[4:]
            if chunk.endswith('\n...'):
                chunk = chunk[:-4]
            parts.append(chunk)
        return '\n'.join(parts)


@pytest.fixture
def teams():
    return TeamDirectory()


@pytest.fixture
def make_bot():
    return FakeBot


@pytest.fixture
def dm():
    def _dm(content):
        return MeshMessage(content=content, sender_id='Tester', is_dm=True)
    return _dm
