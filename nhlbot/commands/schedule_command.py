#!/usr/bin/env python3
"""
Schedule command for the NHL Bot
Shows a team's next five games
"""

from .base_command import BaseCommand
from ..models import MeshMessage
from ..utils import format_clean_date, format_clean_time, to_local

SCHEDULE_LENGTH = 5


class ScheduleCommand(BaseCommand):
    """Handles the schedule command"""

    name = "schedule"
    keywords = ['schedule']
    description = "Next 5 games for a team"
    usage = "schedule <team>"
    category = "schedule"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        abbr = await self.resolve_team_arg(message, args, "schedule seattle")
        if not abbr:
            return False

        team_name = self.bot.teams.display_name(abbr)
        games = await self.bot.team_service.get_upcoming_games(abbr, limit=SCHEDULE_LENGTH)
        if not games:
            return await self.send_response(message, f"No upcoming games found for the {team_name}.")

        lines = [f"{team_name} next {len(games)}:"]
        for game in games:
            local_start = to_local(game.start_time_utc, self.bot.timezone)
            location = 'vs' if game.is_home(abbr) else '@'
            lines.append(f"{format_clean_date(local_start)} {location} {game.opponent_of(abbr)} "
                         f"{format_clean_time(local_start)}")
        return await self.send_response(message, '\n'.join(lines))
