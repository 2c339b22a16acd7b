#!/usr/bin/env python3
"""
Injuries command for the NHL Bot
Team injury report from ESPN
"""

from .base_command import BaseCommand
from ..models import MeshMessage


class InjuriesCommand(BaseCommand):
    """Handles the injuries command"""

    name = "injuries"
    keywords = ['injuries']
    description = "Injured players for a team"
    usage = "injuries <team>"
    category = "news"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        abbr = await self.resolve_team_arg(message, args, "injuries pens")
        if not abbr:
            return False

        team_name = self.bot.teams.display_name(abbr)
        injuries = await self.bot.injury_service.team_injuries(team_name)
        if not injuries:
            return await self.send_response(message, f"{team_name} injuries: No injuries reported.")

        plural = 's' if len(injuries) > 1 else ''
        lines = [f"{team_name} injuries ({len(injuries)} player{plural}):"]
        lines.extend(f"{entry.player_name} - {entry.status}" for entry in injuries)
        lines.append(f"Details: {self.prefix}injury <player>")
        return await self.send_response(message, '\n'.join(lines))
