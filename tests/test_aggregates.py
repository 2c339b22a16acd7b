from nhlbot.aggregates import (
    aggregate,
    aggregate_goalie,
    aggregate_skater,
    aggregate_team,
    goalie_result,
    parse_toi,
    team_game_result,
)
from nhlbot.enums import GameResult
from nhlbot.models import GoalieTotals, PlayerGameLine, TeamGame, SkaterTotals


def goalie_game(sa, ga, toi, **kwargs):
    return PlayerGameLine.from_api({'shotsAgainst': sa, 'goalsAgainst': ga, 'toi': toi, 'gamesStarted': 1, **kwargs})


def team_game(home, away, home_score, away_score, last_period='REG'):
    return TeamGame.from_api({
        'id': 1, 'gameType': 2, 'gameState': 'OFF',
        'homeTeam': {'abbrev': home, 'score': home_score},
        'awayTeam': {'abbrev': away, 'score': away_score},
        'gameOutcome': {'lastPeriodType': last_period},
    })


def test_parse_toi() -> None:
    assert parse_toi("18:30") == 1110
    assert parse_toi("60:00") == 3600
    assert parse_toi(None) == 0
    assert parse_toi("bad") == 0
    assert parse_toi("x:y") == 0


def test_goalie_scenario() -> None:
    games = [
        goalie_game(30, 2, "60:00", wins=1),
        goalie_game(25, 3, "58:00", losses=1),
        goalie_game(28, 1, "61:00", wins=True),
    ]
    totals = aggregate_goalie(games)
    assert totals.shots_against == 83
    assert totals.goals_against == 6
    assert totals.saves == 77
    assert totals.toi_seconds == 179 * 60
    assert totals.record == "2-1-0"
    assert totals.save_pct_display == "92.8"
    assert totals.gaa_display == "2.01"
    assert totals.games_started == 3


def test_goalie_saves_use_save_percentage_when_present() -> None:
    totals = aggregate_goalie([goalie_game(30, 3, "60:00", savePctg=0.9)])
    assert totals.saves == 27


def test_skater_totals() -> None:
    games = [
        PlayerGameLine.from_api({'goals': 1, 'assists': 2, 'plusMinus': 1, 'pim': 2, 'shots': 4, 'toi': '20:00'}),
        PlayerGameLine.from_api({'goals': 0, 'assists': 1, 'plusMinus': -2, 'pim': 0, 'shots': 1, 'toi': '18:30'}),
    ]
    totals = aggregate_skater(games)
    assert (totals.goals, totals.assists, totals.points) == (1, 3, 4)
    assert totals.plus_minus == -1
    assert totals.shooting_pct_display == "20.0"
    assert totals.avg_toi_display == "19:15"


def test_zero_games_yield_zero_totals() -> None:
    skater = aggregate([], is_goaltender=False)
    goalie = aggregate([], is_goaltender=True)
    assert isinstance(skater, SkaterTotals)
    assert isinstance(goalie, GoalieTotals)
    assert skater.points == 0
    assert skater.shooting_pct_display == "0.0"
    assert skater.avg_toi_display == "N/A"
    assert goalie.save_pct_display == "0.0"
    assert goalie.gaa_display == "0.00"
    team = aggregate_team([], "PIT")
    assert team.record == "0-0-0"
    assert team.goals_for_per_game == "0.00"


def test_goalie_result_prefers_decision() -> None:
    assert goalie_result(PlayerGameLine.from_api({'decision': 'W'})) is GameResult.WIN
    assert goalie_result(PlayerGameLine.from_api({'decision': 'O'})) is GameResult.OT_LOSS
    assert goalie_result(PlayerGameLine.from_api({'losses': 1})) is GameResult.LOSS
    assert goalie_result(PlayerGameLine.from_api({})) is GameResult.UNKNOWN


def test_team_results_and_totals() -> None:
    games = [
        team_game("PIT", "NYR", 4, 2),
        team_game("BOS", "PIT", 3, 2, last_period='OT'),
        team_game("PIT", "WSH", 1, 5),
        team_game("TOR", "PIT", 2, 3, last_period='SO'),
    ]
    assert [team_game_result(g, "PIT") for g in games] == [
        GameResult.WIN, GameResult.OT_LOSS, GameResult.LOSS, GameResult.WIN,
    ]
    totals = aggregate_team(games, "PIT")
    assert totals.record == "2-1-1"
    assert (totals.goals_for, totals.goals_against) == (10, 12)
    assert totals.goal_differential == -2
    assert totals.goals_for_per_game == "2.50"
