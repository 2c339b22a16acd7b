#!/usr/bin/env python3
"""
Countdown command for the NHL Bot
Shows the time left until a team's next game
"""

from .base_command import BaseCommand
from ..models import MeshMessage
from ..utils import format_clean_time, format_countdown, format_long_date, to_local


class CountdownCommand(BaseCommand):
    """Handles the countdown command"""

    name = "countdown"
    keywords = ['countdown']
    description = "Time until a team's next game"
    usage = "countdown <team>"
    category = "schedule"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        abbr = await self.resolve_team_arg(message, args, "countdown pens")
        if not abbr:
            return False

        team_name = self.bot.teams.display_name(abbr)
        game = await self.bot.team_service.get_next_game(abbr)
        if not game:
            return await self.send_response(message, f"No upcoming games found for the {team_name}.")

        is_home = game.is_home(abbr)
        opponent = self.bot.teams.display_name(game.opponent_of(abbr))
        # Host city is the home club's nickname
        host_abbr = abbr if is_home else game.opponent_of(abbr)
        host_city = game.home_place or self.bot.teams.display_name(host_abbr).split(' ')[-1]
        local_start = to_local(game.start_time_utc, self.bot.timezone)

        response = (
            f"{team_name} countdown\n"
            f"Next: {'vs' if is_home else '@'} {opponent}\n"
            f"In: {format_countdown(game.start_time_utc)}\n"
            f"{format_long_date(local_start)} {format_clean_time(local_start)}\n"
            f"Host: {host_city}"
        )
        return await self.send_response(message, response)
