#!/usr/bin/env python3
"""
Stats command for the NHL Bot
Current season record and goal totals for a team
"""

from .base_command import BaseCommand
from ..models import MeshMessage
from ..utils import signed


class StatsCommand(BaseCommand):
    """Handles the stats command"""

    name = "stats"
    keywords = ['stats']
    description = "Current season stats for a team"
    usage = "stats <team>"
    category = "team"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        abbr = await self.resolve_team_arg(message, args, "stats pens")
        if not abbr:
            return False

        team_name = self.bot.teams.display_name(abbr)
        row = await self.bot.team_service.get_team_stats(abbr)
        if not row:
            return await self.send_response(message, f"No stats found for the {team_name}.")

        response = (
            f"{team_name} stats\n"
            f"Record: {row.record} ({row.games_played} GP)\n"
            f"Points: {row.points} ({row.point_pctg * 100:.1f}%)\n"
            f"GF: {row.goals_for} GA: {row.goals_against} Diff: {signed(row.goal_differential)}"
        )
        return await self.send_response(message, response)
