#!/usr/bin/env python3
"""
Player stats command for the NHL Bot
Current season NHL totals for the best matching active players
"""

from .base_command import BaseCommand
from ..models import MeshMessage, PlayerSeasonLine
from ..seasons import display_season


def format_goalie_stats(stats) -> str:
    save_pct = f"{stats.save_pctg * 100:.1f}%" if stats.save_pctg else "N/A"
    gaa = f"{stats.goals_against_avg:.2f}" if stats.goals_against_avg else "N/A"
    return (f"{stats.games_played}GP {stats.wins or 0}-{stats.losses or 0}-{stats.ot_losses or 0} "
            f"SV% {save_pct} GAA {gaa} SO {stats.shutouts}")


def format_skater_stats(stats) -> str:
    plus_minus = f"+{stats.plus_minus}" if stats.plus_minus >= 0 else str(stats.plus_minus)
    return (f"{stats.games_played}GP {stats.goals}G {stats.assists}A {stats.points}PTS "
            f"{plus_minus} {stats.pim}PIM")


def format_stat_line(position: str, stats) -> str:
    if position == 'G':
        return format_goalie_stats(stats)
    return format_skater_stats(stats)


class PlayerStatsCommand(BaseCommand):
    """Handles the playerstats command"""

    name = "playerstats"
    keywords = ['playerstats']
    description = "Current season stats for a player (several matches for a surname)"
    usage = "playerstats <name>"
    category = "player"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        query = await self.require_player_query(message, args, "playerstats crosby")
        if not query:
            return False

        lines = await self.bot.player_service.get_player_stats(query)
        if not lines:
            return await self.send_response(message, f"No active NHL players found matching \"{query}\".")

        return await self.send_response(message, self.format_lines(lines, query))

    def format_lines(self, lines, query: str) -> str:
        if len(lines) == 1:
            line: PlayerSeasonLine = lines[0]
            return (f"{line.name} ({line.position}, {line.team}) {display_season(line.season)}\n"
                    f"{format_stat_line(line.position, line.stats)}")

        output = [f"{len(lines)} players matching \"{query}\":"]
        for line in lines:
            output.append(f"{line.name} ({line.position}, {line.team}): {format_stat_line(line.position, line.stats)}")
        return '\n'.join(output)
