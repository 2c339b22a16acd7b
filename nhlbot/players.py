#!/usr/bin/env python3
"""
Player name matching for the NHL Bot
Scores player search hits against a free-text query

Hockey queries are overwhelmingly surname based, so the surname is the
dominant signal. Scores are tiered so callers can tell a confident single
match (>= 80) from an ambiguous list of candidates.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from .models import PlayerCandidate

CONFIDENT_MATCH_SCORE = 80


def split_query(text: str) -> List[str]:
    """Split a player query into whitespace separated tokens"""
    return (text or '').strip().split()


def _partial(a: str, b: str) -> bool:
    return a in b or b in a


def score_match(candidate_name: str, query_tokens: Sequence[str]) -> int:
    """Score how well a player name matches the query tokens (0-100)"""
    if not query_tokens:
        return 0

    name_lower = candidate_name.lower()
    name_parts = name_lower.split()
    if not name_parts:
        return 0
    query = [token.lower() for token in query_tokens]

    if name_lower == ' '.join(query):
        return 100

    query_surname = query[-1]
    candidate_surname = name_parts[-1]
    surname_matches = candidate_surname == query_surname or _partial(query_surname, candidate_surname)

    # Full-name queries must match on the surname
    if len(query) > 1:
        if not surname_matches:
            return 0
        all_parts_match = all(
            any(_partial(token, part) for part in name_parts)
            for token in query
        )
        return 80 if all_parts_match else 40

    if surname_matches:
        return 70 if candidate_surname == query_surname else 50

    # First-name fallback for single word queries
    if any(_partial(query_surname, part) for part in name_parts):
        return 20

    return 0


def is_active_nhl_player(landing: Optional[Dict[str, Any]], teams) -> bool:
    """Check whether the landing feed puts the player on an NHL roster"""
    if not landing:
        return False
    return teams.is_nhl_team(landing.get('currentTeamAbbrev'))


def rank_candidates(raw_results: Iterable[Dict[str, Any]], query_tokens: Sequence[str], teams,
                    active_only: bool = True, prefer_active: bool = False) -> List[PlayerCandidate]:
    """Score search hits and return the non-zero ones, best first.

    Sorting is stable so the search feed's own order breaks exact ties.
    """
    candidates = []
    for raw in raw_results or []:
        name = raw.get('name')
        player_id = raw.get('playerId')
        if not name or player_id is None:
            continue

        team_abbrev = raw.get('teamAbbrev')
        active = raw.get('active') is True
        is_active_nhl = active and teams.is_nhl_team(team_abbrev)
        if active_only and not is_active_nhl:
            continue

        score = score_match(name, query_tokens)
        if score <= 0:
            continue

        candidates.append(PlayerCandidate(
            player_id=int(player_id),
            name=name,
            team_abbrev=team_abbrev,
            active=active,
            score=score,
            is_active_nhl=is_active_nhl,
        ))

    if prefer_active:
        candidates.sort(key=lambda c: (not c.is_active_nhl, -c.score))
    else:
        candidates.sort(key=lambda c: -c.score)
    return candidates


def is_confident(candidates: Sequence[PlayerCandidate], query_tokens: Sequence[str]) -> bool:
    """A full-name query whose best hit scored at least CONFIDENT_MATCH_SCORE"""
    return bool(candidates) and len(query_tokens) > 1 and candidates[0].score >= CONFIDENT_MATCH_SCORE
