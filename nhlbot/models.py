#!/usr/bin/env python3
"""
Data models for the NHL Bot
Contains shared data structures used across modules

Remote payloads are projected into these records at the client/service
boundary so nothing downstream works on raw API dictionaries.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, List, Dict, Any, FrozenSet, Tuple

from .enums import GameType, RecapState, OVERTIME_PERIOD_TYPES


@dataclass
class MeshMessage:
    """Simplified message structure for our bot"""
    content: str
    sender_id: Optional[str] = None
    channel: Optional[str] = None
    hops: Optional[int] = None
    path: Optional[str] = None
    is_dm: bool = False
    timestamp: Optional[int] = None
    snr: Optional[float] = None
    rssi: Optional[int] = None


def localized(value: Any, default: str = "") -> str:
    """Return the text of an NHL API localized field ({'default': ...} or plain str)"""
    if isinstance(value, dict):
        return value.get('default') or default
    if isinstance(value, str):
        return value
    return default


def parse_utc(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as returned by the NHL/YouTube APIs"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_game_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class TeamRecord:
    """Static description of one NHL club"""
    abbreviation: str
    name: str
    aliases: FrozenSet[str] = frozenset()
    search_keywords: Tuple[str, ...] = ()
    rss_slug: Optional[str] = None

    @property
    def short_name(self) -> str:
        """Nickname used in highlight searches, e.g. 'penguins'"""
        return self.name.split(' ')[-1].lower()


@dataclass
class PlayerCandidate:
    """A player search hit scored against the user's query"""
    player_id: int
    name: str
    team_abbrev: Optional[str]
    active: bool
    score: int = 0
    is_active_nhl: bool = False


@dataclass
class PlayerProfile:
    """Best-match player resolved through the landing feed"""
    player_id: int
    name: str
    position: str
    team: str
    team_name: Optional[str]
    score: int

    @property
    def is_goaltender(self) -> bool:
        return self.position == 'G'


@dataclass
class TeamGame:
    """One club-schedule entry"""
    game_id: int
    start_time_utc: Optional[datetime]
    game_type: Optional[GameType]
    game_state: str
    home_abbrev: str
    away_abbrev: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    last_period_type: Optional[str] = None
    venue: Optional[str] = None
    home_place: Optional[str] = None
    away_place: Optional[str] = None
    season: Optional[int] = None
    season_display: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TeamGame":
        home = data.get('homeTeam') or {}
        away = data.get('awayTeam') or {}
        outcome = data.get('gameOutcome') or {}
        try:
            game_type = GameType(data.get('gameType'))
        except ValueError:
            game_type = None
        return cls(
            game_id=data.get('id'),
            start_time_utc=parse_utc(data.get('startTimeUTC')),
            game_type=game_type,
            game_state=data.get('gameState') or '',
            home_abbrev=home.get('abbrev', ''),
            away_abbrev=away.get('abbrev', ''),
            home_score=home.get('score'),
            away_score=away.get('score'),
            last_period_type=outcome.get('lastPeriodType'),
            venue=localized(data.get('venue')) or None,
            home_place=localized(home.get('placeName')) or None,
            away_place=localized(away.get('placeName')) or None,
        )

    def is_home(self, abbr: str) -> bool:
        return self.home_abbrev == abbr

    def opponent_of(self, abbr: str) -> str:
        return self.away_abbrev if self.is_home(abbr) else self.home_abbrev

    def scores_for(self, abbr: str) -> Tuple[int, int]:
        """(club score, opponent score) for the given club"""
        home = self.home_score or 0
        away = self.away_score or 0
        return (home, away) if self.is_home(abbr) else (away, home)

    @property
    def went_to_overtime(self) -> bool:
        return self.last_period_type in OVERTIME_PERIOD_TYPES


@dataclass
class PlayerGameLine:
    """One row of a player's game log"""
    game_id: Optional[int]
    game_date: Optional[date]
    opponent_abbrev: str = 'N/A'
    home_road_flag: Optional[str] = None
    goals: int = 0
    assists: int = 0
    points: int = 0
    plus_minus: int = 0
    pim: int = 0
    shots: int = 0
    toi: Optional[str] = None
    games_started: int = 0
    decision: Optional[str] = None
    wins: Any = None
    losses: Any = None
    ot_losses: Any = None
    shots_against: int = 0
    goals_against: int = 0
    save_pctg: Optional[float] = None
    shutouts: int = 0
    season: Optional[int] = None
    season_display: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "PlayerGameLine":
        goals = data.get('goals') or 0
        assists = data.get('assists') or 0
        points = data.get('points')
        return cls(
            game_id=data.get('gameId'),
            game_date=parse_game_date(data.get('gameDate')),
            opponent_abbrev=data.get('opponentAbbrev') or 'N/A',
            home_road_flag=data.get('homeRoadFlag'),
            goals=goals,
            assists=assists,
            points=points if points is not None else goals + assists,
            plus_minus=data.get('plusMinus') or 0,
            pim=data.get('pim') or 0,
            shots=data.get('shots') or 0,
            toi=data.get('toi'),
            games_started=data.get('gamesStarted') or 0,
            decision=data.get('decision'),
            wins=data.get('wins'),
            losses=data.get('losses'),
            ot_losses=data.get('otLosses'),
            shots_against=data.get('shotsAgainst') or 0,
            goals_against=data.get('goalsAgainst') or 0,
            save_pctg=data.get('savePctg'),
            shutouts=data.get('shutouts') or 0,
        )

    @property
    def is_home(self) -> bool:
        return self.home_road_flag == 'H'


@dataclass
class SkaterTotals:
    games: int = 0
    goals: int = 0
    assists: int = 0
    points: int = 0
    plus_minus: int = 0
    pim: int = 0
    shots: int = 0
    toi_seconds: int = 0
    shooting_pct: float = 0.0

    @property
    def shooting_pct_display(self) -> str:
        return f"{self.shooting_pct:.1f}"

    @property
    def avg_toi_display(self) -> str:
        if self.toi_seconds <= 0 or self.games <= 0:
            return "N/A"
        per_game = self.toi_seconds // self.games
        return f"{per_game // 60}:{per_game % 60:02d}"


@dataclass
class GoalieTotals:
    games: int = 0
    games_started: int = 0
    wins: int = 0
    losses: int = 0
    ot_losses: int = 0
    shots_against: int = 0
    goals_against: int = 0
    saves: int = 0
    shutouts: int = 0
    toi_seconds: int = 0
    save_pct: float = 0.0
    gaa: float = 0.0

    @property
    def save_pct_display(self) -> str:
        return f"{self.save_pct:.1f}"

    @property
    def gaa_display(self) -> str:
        return f"{self.gaa:.2f}"

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}-{self.ot_losses}"


@dataclass
class TeamTotals:
    games: int = 0
    wins: int = 0
    losses: int = 0
    ot_losses: int = 0
    goals_for: int = 0
    goals_against: int = 0

    @property
    def goal_differential(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}-{self.ot_losses}"

    @property
    def goals_for_per_game(self) -> str:
        return f"{(self.goals_for / self.games) if self.games else 0:.2f}"

    @property
    def goals_against_per_game(self) -> str:
        return f"{(self.goals_against / self.games) if self.games else 0:.2f}"


@dataclass
class StandingRow:
    """One club in the league standings"""
    abbrev: str
    team_name: str
    wins: int = 0
    losses: int = 0
    ot_losses: int = 0
    points: int = 0
    point_pctg: float = 0.0
    games_played: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_differential: int = 0
    division_name: Optional[str] = None
    conference_name: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "StandingRow":
        return cls(
            abbrev=localized(data.get('teamAbbrev')),
            team_name=localized(data.get('teamName')),
            wins=data.get('wins') or 0,
            losses=data.get('losses') or 0,
            ot_losses=data.get('otLosses') or 0,
            points=data.get('points') or 0,
            point_pctg=data.get('pointPctg') or 0.0,
            games_played=data.get('gamesPlayed') or 0,
            goals_for=data.get('goalFor') or 0,
            goals_against=data.get('goalAgainst') or 0,
            goal_differential=data.get('goalDifferential') or 0,
            division_name=data.get('divisionName'),
            conference_name=data.get('conferenceName'),
        )

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}-{self.ot_losses}"


@dataclass
class SeasonStats:
    """Season or career totals from the player landing feed"""
    games_played: int = 0
    goals: int = 0
    assists: int = 0
    points: int = 0
    plus_minus: int = 0
    pim: int = 0
    wins: Optional[int] = None
    losses: Optional[int] = None
    ot_losses: Optional[int] = None
    goals_against_avg: Optional[float] = None
    save_pctg: Optional[float] = None
    shutouts: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SeasonStats":
        goals = data.get('goals') or 0
        assists = data.get('assists') or 0
        return cls(
            games_played=data.get('gamesPlayed') or 0,
            goals=goals,
            assists=assists,
            points=goals + assists,
            plus_minus=data.get('plusMinus') or 0,
            pim=data.get('pim') or data.get('penaltyMinutes') or 0,
            wins=data.get('wins'),
            losses=data.get('losses'),
            ot_losses=data.get('otLosses'),
            goals_against_avg=data.get('goalsAgainstAvg'),
            save_pctg=data.get('savePctg', data.get('savePct')),
            shutouts=data.get('shutouts') or 0,
        )


@dataclass
class PlayerSeasonLine:
    name: str
    player_id: int
    team: str
    position: str
    stats: SeasonStats
    season: int
    score: int = 0


@dataclass
class PlayerCareerLine:
    name: str
    player_id: int
    team: str
    position: str
    stats: SeasonStats
    score: int = 0
    is_active: bool = False
    birth_date: Optional[str] = None
    birth_city: Optional[str] = None
    birth_country: Optional[str] = None


@dataclass
class StarPlayer:
    name: str
    team_abbrev: str = ''


@dataclass
class RecapVideo:
    state: RecapState
    url: str
    title: str
    search_query: Optional[str] = None
    channel_title: Optional[str] = None
    thumbnail: Optional[str] = None
    published_at: Optional[str] = None
    no_video_found: bool = False


@dataclass
class GameRecap:
    game: TeamGame
    details_available: bool = False
    stars: List[StarPlayer] = field(default_factory=list)
    video: Optional[RecapVideo] = None

    @property
    def state(self) -> RecapState:
        return self.video.state if self.video else RecapState.NO_VIDEO


@dataclass
class InjuryEntry:
    player_name: str
    team_name: str
    status: str = 'Unknown'
    injury_type: str = 'Undisclosed'
    return_date: Optional[str] = None
    updated: Optional[str] = None
    comment: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any], team_name: str) -> "InjuryEntry":
        athlete = data.get('athlete') or {}
        details = data.get('details') or {}
        return cls(
            player_name=athlete.get('displayName') or 'Unknown Player',
            team_name=team_name,
            status=data.get('status') or 'Unknown',
            injury_type=details.get('type') or 'Undisclosed',
            return_date=details.get('returnDate'),
            updated=data.get('date'),
            comment=data.get('longComment') or data.get('shortComment'),
        )


@dataclass
class NewsItem:
    title: str
    link: str
    description: str = ''
    published: Optional[datetime] = None
