#!/usr/bin/env python3
"""
Aggregate statistics for the NHL Bot
Reduces game lists into totals for skaters, goaltenders and clubs
"""

from typing import Optional, Sequence, Union

from .enums import GameResult, OVERTIME_PERIOD_TYPES
from .models import GoalieTotals, PlayerGameLine, SkaterTotals, TeamGame, TeamTotals


def parse_toi(toi: Optional[str]) -> int:
    """Convert 'MM:SS' time on ice into seconds"""
    if not toi or ':' not in toi:
        return 0
    minutes, _, seconds = toi.partition(':')
    try:
        return int(minutes) * 60 + int(seconds)
    except ValueError:
        return 0


def _flag(value) -> bool:
    """Game log win/loss flags arrive as booleans or 1/0"""
    return value is True or value == 1


def game_saves(game: PlayerGameLine) -> int:
    if game.save_pctg:
        return round(game.shots_against * game.save_pctg)
    return game.shots_against - game.goals_against


def aggregate_skater(games: Sequence[PlayerGameLine]) -> SkaterTotals:
    totals = SkaterTotals(games=len(games))
    for game in games:
        totals.goals += game.goals
        totals.assists += game.assists
        totals.plus_minus += game.plus_minus
        totals.pim += game.pim
        totals.shots += game.shots
        totals.toi_seconds += parse_toi(game.toi)

    totals.points = totals.goals + totals.assists
    if totals.shots > 0:
        totals.shooting_pct = totals.goals / totals.shots * 100
    return totals


def aggregate_goalie(games: Sequence[PlayerGameLine]) -> GoalieTotals:
    totals = GoalieTotals(games=len(games))
    for game in games:
        totals.games_started += game.games_started
        totals.wins += 1 if _flag(game.wins) else 0
        totals.losses += 1 if _flag(game.losses) else 0
        totals.ot_losses += 1 if _flag(game.ot_losses) else 0
        totals.shots_against += game.shots_against
        totals.goals_against += game.goals_against
        totals.saves += game_saves(game)
        totals.shutouts += game.shutouts
        totals.toi_seconds += parse_toi(game.toi)

    if totals.shots_against > 0:
        totals.save_pct = totals.saves / totals.shots_against * 100
    if totals.toi_seconds > 0:
        totals.gaa = totals.goals_against / (totals.toi_seconds / 3600)
    return totals


def aggregate(games: Sequence[PlayerGameLine], is_goaltender: bool) -> Union[SkaterTotals, GoalieTotals]:
    """Position-aware reduction of a player's game lines"""
    if is_goaltender:
        return aggregate_goalie(games)
    return aggregate_skater(games)


def goalie_result(game: PlayerGameLine) -> GameResult:
    """Per-game goaltender result: decision field, then win/loss flags, else unknown"""
    if game.decision == 'W' or _flag(game.wins):
        return GameResult.WIN
    if game.decision == 'L' or _flag(game.losses):
        return GameResult.LOSS
    if game.decision == 'O' or _flag(game.ot_losses):
        return GameResult.OT_LOSS
    return GameResult.UNKNOWN


def team_game_result(game: TeamGame, abbr: str) -> GameResult:
    team_score, opponent_score = game.scores_for(abbr)
    if team_score > opponent_score:
        return GameResult.WIN
    if game.last_period_type in OVERTIME_PERIOD_TYPES:
        return GameResult.OT_LOSS
    return GameResult.LOSS


def aggregate_team(games: Sequence[TeamGame], abbr: str) -> TeamTotals:
    totals = TeamTotals(games=len(games))
    for game in games:
        team_score, opponent_score = game.scores_for(abbr)
        totals.goals_for += team_score
        totals.goals_against += opponent_score

        result = team_game_result(game, abbr)
        if result is GameResult.WIN:
            totals.wins += 1
        elif result is GameResult.OT_LOSS:
            totals.ot_losses += 1
        else:
            totals.losses += 1
    return totals
