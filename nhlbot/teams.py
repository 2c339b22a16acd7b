#!/usr/bin/env python3
"""
Team directory for the NHL Bot
Maps free-text team input (abbreviations, cities, nicknames) onto the
canonical three-letter abbreviation used by the NHL API
"""

import json
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from .models import TeamRecord

DEFAULT_TEAMS_FILE = Path(__file__).parent / 'data' / 'teams.json'


def load_teams(path: Optional[str] = None) -> Dict[str, TeamRecord]:
    """Load the static team table (abbreviation -> TeamRecord)"""
    teams_path = Path(path) if path else DEFAULT_TEAMS_FILE
    with open(teams_path, 'r', encoding='utf-8') as f:
        raw = json.load(f)

    teams = {}
    for abbr, data in raw.items():
        key = abbr.upper()
        teams[key] = TeamRecord(
            abbreviation=key,
            name=data['name'],
            aliases=frozenset(alias.lower() for alias in data.get('aliases', [])),
            search_keywords=tuple(data.get('searchKeywords', [])),
            rss_slug=data.get('rssSlug'),
        )
    return teams


class TeamDirectory:
    """Read-only lookup over the team table"""

    def __init__(self, teams: Optional[Dict[str, TeamRecord]] = None):
        self._teams = dict(teams) if teams is not None else load_teams()

    def __contains__(self, abbr) -> bool:
        return isinstance(abbr, str) and abbr in self._teams

    def __iter__(self) -> Iterator[TeamRecord]:
        return iter(self._teams.values())

    def __len__(self) -> int:
        return len(self._teams)

    def get(self, abbr: Optional[str]) -> Optional[TeamRecord]:
        if not abbr:
            return None
        return self._teams.get(abbr)

    def resolve_team(self, text: Optional[str]) -> Optional[str]:
        """Resolve user input to an abbreviation, or None if it is not a known team.

        An input that already is an abbreviation wins; otherwise the first team
        whose alias set contains the lowercased input. No partial matching.
        """
        if not text:
            return None
        cleaned = text.strip()
        if not cleaned:
            return None

        if cleaned.upper() in self._teams:
            return cleaned.upper()

        lowered = cleaned.lower()
        for abbr, team in self._teams.items():
            if lowered in team.aliases:
                return abbr
        return None

    def team_name(self, abbr: Optional[str]) -> Optional[str]:
        team = self.get(abbr)
        return team.name if team else None

    def display_name(self, abbr: Optional[str]) -> str:
        """Full name when known, otherwise the abbreviation itself"""
        return self.team_name(abbr) or (abbr or 'N/A')

    def short_name(self, abbr: Optional[str]) -> str:
        """Lowercase nickname, e.g. 'penguins'; unknown clubs fall back to the abbreviation"""
        team = self.get(abbr)
        return team.short_name if team else (abbr or '').lower()

    def search_keywords(self, abbr: Optional[str]) -> Tuple[str, ...]:
        team = self.get(abbr)
        return team.search_keywords if team else ()

    def rss_slug(self, abbr: Optional[str]) -> Optional[str]:
        team = self.get(abbr)
        return team.rss_slug if team else None

    def is_nhl_team(self, abbr: Optional[str]) -> bool:
        return self.get(abbr) is not None
