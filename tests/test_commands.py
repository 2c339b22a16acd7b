from types import SimpleNamespace

import pytest

from nhlbot.channel_manager import ChannelManager
from nhlbot.command_manager import ERROR_REPLY
from nhlbot.message_handler import MessageHandler, describe_path, split_channel_text
from nhlbot.models import MeshMessage
from nhlbot.seasons import current_season, display_season

from conftest import FakeInjuriesClient, FakeNHLClient, FakeNewsClient, FakeSearchClient, rss, schedule_game

FUTURE_SCHEDULE = [
    schedule_game(100, '2025-01-10T00:00:00Z', 'PIT', 'TOR', 4, 3),
    schedule_game(101, '2025-01-13T00:30:00Z', 'NYR', 'PIT', 2, 5, last_period='OT'),
    schedule_game(102, '2099-01-10T00:00:00Z', 'PIT', 'WSH', state='FUT'),
    schedule_game(103, '2099-01-12T19:30:00Z', 'PHI', 'PIT', state='FUT'),
]


def standing(abbr, wins, points, division='Metropolitan', conference='Eastern'):
    return {
        'teamAbbrev': {'default': abbr},
        'teamName': {'default': abbr},
        'wins': wins,
        'losses': 10,
        'otLosses': 2,
        'points': points,
        'pointPctg': points / 100,
        'gamesPlayed': wins + 12,
        'goalFor': 120,
        'goalAgainst': 110,
        'goalDifferential': 10,
        'divisionName': division,
        'conferenceName': conference,
    }


STANDINGS = [
    standing('WSH', 30, 62),
    standing('NJD', 27, 56),
    standing('PIT', 22, 46),
    standing('BOS', 25, 52, division='Atlantic'),
    standing('EDM', 28, 58, division='Pacific', conference='Western'),
]


def pit_bot(make_bot, **kwargs):
    return make_bot(FakeNHLClient(schedules={('PIT', 'now'): FUTURE_SCHEDULE}, **kwargs))


# Dispatch

@pytest.mark.asyncio
async def test_unprefixed_message_is_ignored(make_bot, dm) -> None:
    bot = make_bot()
    handled = await bot.command_manager.execute_commands(dm("schedule pens"))
    assert handled is False
    assert bot.sent == []


@pytest.mark.asyncio
async def test_keyword_must_match_exactly(make_bot, dm) -> None:
    bot = make_bot()
    assert await bot.command_manager.execute_commands(dm("!teampast pens")) is False
    assert await bot.command_manager.execute_commands(dm("!schedules pens")) is False
    assert bot.sent == []


@pytest.mark.asyncio
async def test_keyword_is_case_insensitive(make_bot, dm) -> None:
    bot = pit_bot(make_bot)
    assert await bot.command_manager.execute_commands(dm("!SCHEDULE pens")) is True
    assert bot.sent[0].startswith("Pittsburgh Penguins next 2:")


@pytest.mark.asyncio
async def test_failing_command_sends_error_reply(make_bot, dm) -> None:
    bot = make_bot(FakeNHLClient(schedules={('PIT', 'now'): RuntimeError('api down')}))
    assert await bot.command_manager.execute_commands(dm("!countdown pens")) is True
    assert bot.sent == [ERROR_REPLY]


@pytest.mark.asyncio
async def test_missing_and_unknown_team(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!schedule"))
    await bot.command_manager.execute_commands(dm("!schedule mooses"))

    assert bot.sent[0] == "Please specify a team! Example: !schedule seattle"
    assert bot.sent[1] == ('Sorry, I don\'t recognize the team "mooses". '
                           'Use !commands to see supported teams.')


@pytest.mark.asyncio
async def test_every_keyword_registered(make_bot) -> None:
    bot = make_bot()
    keywords = bot.command_manager.plugin_loader.keyword_mappings
    for keyword in ['help', 'commands', 'countdown', 'countdownsite', 'schedule', 'previousgame', 'recap',
                    'stats', 'playerstats', 'careerstats', 'divisionstandings', 'conferencestandings',
                    'leaguestandings', 'injuries', 'injury', 'news', 'teampast5', 'teampast10', 'teampast20',
                    'playerpast5', 'playerpast10', 'playerpast20']:
        assert keyword in keywords
    assert bot.command_manager.get_plugin_by_name('teampast').keywords == ['teampast5', 'teampast10', 'teampast20']


@pytest.mark.asyncio
async def test_long_reply_is_chunked(make_bot, dm) -> None:
    items = [(f"Headline number {i} about a very long hockey story", f"https://example.com/news/{i}", '',
              'Sun, 12 Jan 2025 03:00:00 GMT') for i in range(5)]
    bot = make_bot(news_client=FakeNewsClient(rss(*items)))

    await bot.command_manager.execute_commands(dm("!news"))

    assert len(bot.sent) > 1
    assert all(len(chunk) <= 130 for chunk in bot.sent)
    assert bot.sent[0].endswith("...")


# Help

@pytest.mark.asyncio
async def test_help_lists_commands_and_teams(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!commands"))

    assert bot.reply.startswith("NHL Bot commands")
    assert "!teampast5" in bot.reply
    assert "Teams: name, city or abbr" in bot.reply


@pytest.mark.asyncio
async def test_help_for_one_command(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!help countdown"))
    await bot.command_manager.execute_commands(dm("!help nothing"))

    assert bot.sent[0] == "!countdown: Time until a team's next game Usage: !countdown <team>"
    assert bot.sent[1].startswith("Unknown command: nothing")


# Schedule commands

@pytest.mark.asyncio
async def test_countdown(make_bot, dm) -> None:
    bot = pit_bot(make_bot)
    await bot.command_manager.execute_commands(dm("!countdown pens"))

    lines = bot.reply.split('\n')
    assert lines[0] == "Pittsburgh Penguins countdown"
    assert lines[1] == "Next: vs Washington Capitals"
    assert lines[2].startswith("In: ") and lines[2].endswith("m")
    assert lines[3].endswith("January 10, 2099 12:00 AM")
    assert lines[4] == "Host: PIT"


@pytest.mark.asyncio
async def test_countdown_without_games(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!countdown seattle"))
    assert bot.reply == "No upcoming games found for the Seattle Kraken."


@pytest.mark.asyncio
async def test_countdownsite(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!countdownsite"))
    assert bot.reply == "NHL Countdown: https://tomcourt89.github.io/NHL-Countdown/"


@pytest.mark.asyncio
async def test_schedule(make_bot, dm) -> None:
    bot = pit_bot(make_bot)
    await bot.command_manager.execute_commands(dm("!schedule pittsburgh"))

    assert bot.reply == "Pittsburgh Penguins next 2:\nJan 10 vs WSH 12:00 AM\nJan 12 @ PHI 7:30 PM"


# Team commands

@pytest.mark.asyncio
async def test_previous_game(make_bot, dm) -> None:
    bot = pit_bot(make_bot)
    await bot.command_manager.execute_commands(dm("!previousgame pens"))

    assert bot.reply.split('\n') == [
        "Pittsburgh Penguins previous game",
        "WIN (OT): @ New York Rangers",
        "PIT 5 - NYR 2",
        "Monday, Jan 13",
    ]


@pytest.mark.asyncio
async def test_recap_without_video_key(make_bot, dm) -> None:
    details = {101: {'summary': {'threeStars': [
        {'name': {'default': 'S. Crosby'}, 'teamAbbrev': 'PIT'},
        {'name': {'default': 'A. Panarin'}, 'teamAbbrev': 'NYR'},
    ]}}}
    bot = pit_bot(make_bot, game_details=details)
    await bot.command_manager.execute_commands(dm("!recap pens"))

    lines = bot.reply.split('\n')
    assert lines[0] == "Pittsburgh Penguins vs New York Rangers"
    assert lines[1] == "Jan 13: PIT 5 @ NYR 2"
    assert lines[2].startswith("https://www.youtube.com/results?search_query=")
    assert lines[3:] == ["Three stars:", "1* S. Crosby (PIT)", "2* A. Panarin (NYR)"]


@pytest.mark.asyncio
async def test_recap_when_gamecenter_fails(make_bot, dm) -> None:
    bot = pit_bot(make_bot, game_details={101: RuntimeError('timeout')})
    await bot.command_manager.execute_commands(dm("!recap pens"))

    assert "No video yet. NHL.com: https://www.nhl.com/gamecenter/101" in bot.reply
    assert "Three stars" not in bot.reply


@pytest.mark.asyncio
async def test_team_stats(make_bot, dm) -> None:
    bot = make_bot(FakeNHLClient(standings=STANDINGS))
    await bot.command_manager.execute_commands(dm("!stats pens"))
    await bot.command_manager.execute_commands(dm("!stats kraken"))

    assert bot.sent[0] == ("Pittsburgh Penguins stats\nRecord: 22-10-2 (34 GP)\nPoints: 46 (46.0%)\n"
                           "GF: 120 GA: 110 Diff: +10")
    assert bot.sent[1] == "No stats found for the Seattle Kraken."


@pytest.mark.asyncio
async def test_team_past_games(make_bot, dm) -> None:
    season = current_season()
    games = [
        schedule_game(1, '2099-01-05T00:00:00Z', 'DET', 'PIT', 3, 2, last_period='OT'),
        schedule_game(2, '2099-01-03T00:00:00Z', 'PIT', 'CBJ', 4, 1),
    ]
    bot = make_bot(FakeNHLClient(schedules={('PIT', season): games}))
    await bot.command_manager.execute_commands(dm("!teampast5 pens"))

    lines = bot.reply.split('\n')
    assert lines[0] == "Pittsburgh Penguins last 2 Regular Season games"
    assert lines[1] == "Jan 5 @ DET: OTL 2-3 (OT)"
    assert lines[2] == "Jan 3 vs CBJ: W 4-1"
    assert lines[3] == "Record: 1-0-1 | GF 6 GA 4 (+2)"
    assert lines[4] == "GF/G 3.00 GA/G 2.00"
    assert lines[5] == "(Only 2 games found)"


@pytest.mark.asyncio
async def test_team_past_games_spanning_seasons_get_dividers(make_bot, dm) -> None:
    season = current_season()
    previous = season - 10001
    schedules = {
        ('PIT', season): [schedule_game(1, '2099-01-05T00:00:00Z', 'PIT', 'DET', 2, 1)],
        ('PIT', previous): [schedule_game(2, '2098-04-05T00:00:00Z', 'PIT', 'CBJ', 3, 1)],
    }
    bot = make_bot(FakeNHLClient(schedules=schedules))
    await bot.command_manager.execute_commands(dm("!teampast5 pens"))

    assert f"-- {display_season(season)} Regular Season --" in bot.reply
    assert f"-- {display_season(previous)} Regular Season --" in bot.reply


@pytest.mark.asyncio
async def test_team_past_playoffs_none_found(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!teampast10 sharks playoffs"))
    await bot.command_manager.execute_commands(dm("!teampast10"))

    assert bot.sent[0] == "No recent playoff games found for the San Jose Sharks."
    assert bot.sent[1] == "Please specify a team! Example: !teampast10 pens or !teampast10 pens playoffs"


# Standings

@pytest.mark.asyncio
async def test_division_standings_highlights_team(make_bot, dm) -> None:
    bot = make_bot(FakeNHLClient(standings=STANDINGS))
    await bot.command_manager.execute_commands(dm("!divisionstandings pens"))

    assert bot.reply.split('\n') == [
        "Metropolitan Division standings",
        "1. WSH 30-10-2 62pts",
        "2. NJD 27-10-2 56pts",
        ">3. PIT 22-10-2 46pts",
    ]


@pytest.mark.asyncio
async def test_conference_and_league_standings(make_bot, dm) -> None:
    bot = make_bot(FakeNHLClient(standings=STANDINGS))
    await bot.command_manager.execute_commands(dm("!conferencestandings bruins"))
    await bot.command_manager.execute_commands(dm("!leaguestandings pens"))

    conference = bot.sent[0].split('\n')
    assert conference[0] == "Eastern Conference standings"
    assert conference[3] == ">3. BOS 25-10-2 52pts"

    league = bot.reply.split('\n')
    assert "Pittsburgh Penguins: #5 of 5, 22-10-2, 46pts (46.0%)" in league
    assert "NHL League standings" in league


@pytest.mark.asyncio
async def test_standings_unavailable(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!divisionstandings pens"))
    await bot.command_manager.execute_commands(dm("!leaguestandings"))

    assert bot.sent == ["Could not find division standings.", "Could not find league standings."]


# Player commands

def player_bot(make_bot, landing, game_logs=None):
    search = FakeSearchClient([{'playerId': '87', 'name': 'Sidney Crosby', 'teamAbbrev': 'PIT', 'active': True}])
    return make_bot(FakeNHLClient(landings={87: landing}, game_logs=game_logs), search_client=search)


def crosby_landing():
    return {
        'currentTeamAbbrev': 'PIT',
        'position': 'C',
        'birthDate': '1987-08-07',
        'birthCity': {'default': 'Cole Harbour'},
        'birthCountry': 'CAN',
        'seasonTotals': [{'season': current_season(), 'leagueAbbrev': 'NHL', 'gamesPlayed': 40,
                          'goals': 15, 'assists': 30, 'plusMinus': -4, 'pim': 12}],
        'careerTotals': {'regularSeason': {'gamesPlayed': 1300, 'goals': 600, 'assists': 1000,
                                           'plusMinus': 190, 'pim': 700}},
    }


@pytest.mark.asyncio
async def test_player_stats(make_bot, dm) -> None:
    bot = player_bot(make_bot, crosby_landing())
    await bot.command_manager.execute_commands(dm("!playerstats sidney crosby"))

    assert bot.reply == (f"Sidney Crosby (C, PIT) {display_season(current_season())}\n"
                         f"40GP 15G 30A 45PTS -4 12PIM")


@pytest.mark.asyncio
async def test_player_stats_usage_and_not_found(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!playerstats"))
    await bot.command_manager.execute_commands(dm("!playerstats nobody"))

    assert bot.sent[0] == "Please specify a player name! Example: !playerstats crosby"
    assert bot.sent[1] == 'No active NHL players found matching "nobody".'


@pytest.mark.asyncio
async def test_career_stats(make_bot, dm) -> None:
    bot = player_bot(make_bot, crosby_landing())
    await bot.command_manager.execute_commands(dm("!careerstats crosby"))

    lines = bot.reply.split('\n')
    assert lines[0].startswith("Sidney Crosby career (C, PIT), age ")
    assert lines[1] == "1300GP 600G 1000A 1600PTS +190 700PIM"
    assert lines[2] == "Born: Cole Harbour, CAN"


@pytest.mark.asyncio
async def test_player_past_games(make_bot, dm) -> None:
    logs = {(87, current_season(), 2): [
        {'gameId': 1, 'gameDate': '2099-01-05', 'opponentAbbrev': 'DET', 'homeRoadFlag': 'R',
         'goals': 1, 'assists': 1, 'plusMinus': 2, 'shots': 4, 'toi': '20:00'},
        {'gameId': 2, 'gameDate': '2099-01-03', 'opponentAbbrev': 'CBJ', 'homeRoadFlag': 'H',
         'assists': 1, 'plusMinus': -1, 'pim': 2, 'shots': 1, 'toi': '18:30'},
    ]}
    bot = player_bot(make_bot, crosby_landing(), game_logs=logs)
    await bot.command_manager.execute_commands(dm("!playerpast5 crosby"))

    lines = bot.reply.split('\n')
    assert lines[0] == "Sidney Crosby (C, PIT) last 2 Regular Season games"
    assert lines[1] == "Jan 5 @ DET: 1G 1A 2PTS | +2 | 0PIM"
    assert lines[2] == "Jan 3 vs CBJ: 0G 1A 1PTS | -1 | 2PIM"
    assert lines[3] == "1G 2A 3PTS | +1 | 2PIM"
    assert lines[-1] == "(Only 2 games found)"


@pytest.mark.asyncio
async def test_player_past_games_unknown_player(make_bot, dm) -> None:
    bot = make_bot()
    await bot.command_manager.execute_commands(dm("!playerpast10 nobody playoffs"))
    assert bot.reply == 'No active NHL player found matching "nobody".'


# News and injuries

INJURIES = {'injuries': [{
    'displayName': 'Pittsburgh Penguins',
    'injuries': [
        {'athlete': {'displayName': 'Bryan Rust'}, 'status': 'Day-To-Day', 'date': '2025-01-12T18:00:00Z',
         'details': {'type': 'Lower Body', 'returnDate': '2025-01-20'}, 'shortComment': 'Rust is day-to-day.'},
        {'athlete': {'displayName': 'Kris Letang'}, 'status': 'Out'},
    ],
}]}


@pytest.mark.asyncio
async def test_team_injuries(make_bot, dm) -> None:
    bot = make_bot(injuries_client=FakeInjuriesClient(INJURIES))
    await bot.command_manager.execute_commands(dm("!injuries pens"))
    await bot.command_manager.execute_commands(dm("!injuries kraken"))

    assert bot.sent[0] == ("Pittsburgh Penguins injuries (2 players):\nBryan Rust - Day-To-Day\n"
                           "Kris Letang - Out\nDetails: !injury <player>")
    assert bot.sent[1] == "Seattle Kraken injuries: No injuries reported."


@pytest.mark.asyncio
async def test_player_injury(make_bot, dm) -> None:
    bot = make_bot(injuries_client=FakeInjuriesClient(INJURIES))
    await bot.command_manager.execute_commands(dm("!injury rust"))

    assert bot.reply.split('\n') == [
        "Bryan Rust (Pittsburgh Penguins)",
        "Day-To-Day: Lower Body, updated Jan 12, 2025",
        "Expected return: Jan 20, 2025",
        "Rust is day-to-day.",
    ]


@pytest.mark.asyncio
async def test_player_injury_not_found(make_bot, dm) -> None:
    bot = make_bot(injuries_client=FakeInjuriesClient(INJURIES))
    await bot.command_manager.execute_commands(dm("!injury gretzky"))
    assert bot.reply.startswith('No injury information found for "gretzky".')


@pytest.mark.asyncio
async def test_news(make_bot, dm) -> None:
    league = rss(('Penguins win', 'https://example.com/1', '', 'Sun, 12 Jan 2025 03:00:00 GMT'))
    bot = make_bot(news_client=FakeNewsClient(league))
    await bot.command_manager.execute_commands(dm("!news"))
    await bot.command_manager.execute_commands(dm("!news kraken"))

    assert bot.sent[0] == "NHL news\nJan 12: Penguins win\nhttps://example.com/1"
    assert bot.sent[1] == "No recent news found for the Seattle Kraken. Use !news for league news."


# Message handling

def test_split_channel_text() -> None:
    assert split_channel_text("Alice: !schedule pens") == ("Alice", "!schedule pens")
    assert split_channel_text("!schedule pens") == ("Channel User", "!schedule pens")


def test_describe_path() -> None:
    assert describe_path(255) == (0, "Direct (0 hops)")
    assert describe_path(None) == (0, "Direct (0 hops)")
    assert describe_path(3) == (3, "Routed through 3 hops")


@pytest.mark.asyncio
async def test_channel_message_routed_to_command(make_bot) -> None:
    bot = make_bot()
    bot.channel_manager = ChannelManager(bot)
    bot.channel_manager.register_channel(1, 'NHL')
    handler = MessageHandler(bot)

    event = SimpleNamespace(payload={'channel_idx': 1, 'text': 'Alice: !countdownsite', 'path_len': 2})
    await handler.handle_channel_message(event)

    assert bot.sent == ["NHL Countdown: https://tomcourt89.github.io/NHL-Countdown/"]


def test_unmonitored_channel_and_banned_user_ignored(make_bot) -> None:
    bot = make_bot()
    bot.command_manager.banned_users = ['Troll']
    handler = MessageHandler(bot)

    assert not handler.should_process_message(MeshMessage(content='!help', sender_id='Bob', channel='General'))
    assert not handler.should_process_message(MeshMessage(content='!help', sender_id='Troll', is_dm=True))
    assert handler.should_process_message(MeshMessage(content='!help', sender_id='Bob', channel='NHL'))

    bot.config.set('Channels', 'respond_to_dms', 'false')
    assert not handler.should_process_message(MeshMessage(content='!help', sender_id='Bob', is_dm=True))
