#!/usr/bin/env python3
"""
Player past games commands for the NHL Bot
Last 5/10/20 games for a player with position-aware totals
"""

from .base_command import BaseCommand
from ..aggregates import aggregate_goalie, aggregate_skater, goalie_result
from ..models import MeshMessage, PlayerGameLine
from ..utils import format_clean_date, signed


def _game_date(game: PlayerGameLine) -> str:
    return format_clean_date(game.game_date) if game.game_date else '?'


def format_goalie_game(game: PlayerGameLine) -> str:
    sa = game.shots_against
    ga = game.goals_against
    save_pct = f"{game.save_pctg * 100:.1f}" if game.save_pctg else "0.0"
    location = 'vs' if game.is_home else '@'
    return (f"{_game_date(game)} {location} {game.opponent_abbrev}: {goalie_result(game).value} | "
            f"{sa - ga}/{sa} SV ({save_pct}%) | {ga} GA")


def format_skater_game(game: PlayerGameLine) -> str:
    location = 'vs' if game.is_home else '@'
    return (f"{_game_date(game)} {location} {game.opponent_abbrev}: {game.goals}G {game.assists}A "
            f"{game.points}PTS | {signed(game.plus_minus)} | {game.pim}PIM")


class PlayerPastCommand(BaseCommand):
    """Handles playerpast5, playerpast10 and playerpast20"""

    name = "playerpast"
    keywords = ['playerpast5', 'playerpast10', 'playerpast20']
    description = "Last 5/10/20 games for a player, add 'playoffs' for playoff games"
    usage = "playerpast5 <name> [playoffs]"
    category = "player"

    async def execute(self, message: MeshMessage) -> bool:
        keyword, args = self.parse_command(message)
        count = self.requested_count(keyword)
        name_args, is_playoffs = self.split_playoffs_flag(args)
        query = await self.require_player_query(message, name_args, f"{keyword} crosby")
        if not query:
            return False

        player = await self.bot.player_service.search_player(query)
        if not player:
            return await self.send_response(message, f"No active NHL player found matching \"{query}\".")

        games = await self.bot.player_service.get_player_past_games(player.player_id, count, is_playoffs)
        if not games:
            game_type = 'playoff' if is_playoffs else 'regular season'
            return await self.send_response(message, f"No recent {game_type} games found for {player.name}.")

        title = 'Playoff' if is_playoffs else 'Regular Season'
        lines = [f"{player.name} ({player.position}, {player.team}) last {len(games)} {title} games"]
        format_line = format_goalie_game if player.is_goaltender else format_skater_game
        lines.extend(self.format_season_sections(games, is_playoffs, format_line))

        if player.is_goaltender:
            totals = aggregate_goalie(games)
            lines.append(f"Record: {totals.record} | SV% {totals.save_pct_display} | GAA {totals.gaa_display}")
            lines.append(f"Saves {totals.saves} | GA {totals.goals_against} | SO {totals.shutouts}")
        else:
            totals = aggregate_skater(games)
            lines.append(f"{totals.goals}G {totals.assists}A {totals.points}PTS | {signed(totals.plus_minus)} | "
                         f"{totals.pim}PIM")
            lines.append(f"Shots {totals.shots} ({totals.shooting_pct_display}%) | TOI/G {totals.avg_toi_display}")

        if len(games) < count:
            lines.append(f"(Only {len(games)} {'playoff ' if is_playoffs else ''}games found)")
        return await self.send_response(message, '\n'.join(lines))
