#!/usr/bin/env python3
"""
Career stats command for the NHL Bot
Regular season NHL career totals, retired players included
"""

from .base_command import BaseCommand
from .playerstats_command import format_stat_line
from ..models import MeshMessage, PlayerCareerLine
from ..utils import calculate_age


class CareerStatsCommand(BaseCommand):
    """Handles the careerstats command"""

    name = "careerstats"
    keywords = ['careerstats']
    description = "NHL regular season career totals for a player"
    usage = "careerstats <name>"
    category = "player"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        query = await self.require_player_query(message, args, "careerstats ovechkin")
        if not query:
            return False

        lines = await self.bot.player_service.get_player_career_stats(query)
        if not lines:
            return await self.send_response(message, f"No NHL players found matching \"{query}\".")

        if len(lines) == 1:
            return await self.send_response(message, self.format_career(lines[0]))

        output = [f"{len(lines)} players matching \"{query}\":"]
        for line in lines:
            status = line.team if line.is_active else "retired"
            output.append(f"{line.name} ({line.position}, {status}): {format_stat_line(line.position, line.stats)}")
        return await self.send_response(message, '\n'.join(output))

    def format_career(self, line: PlayerCareerLine) -> str:
        age = calculate_age(line.birth_date)
        header = f"{line.name} career ({line.position}, {line.team if line.is_active else 'retired'})"
        if age is not None and line.is_active:
            header += f", age {age}"

        birth_place = ', '.join(part for part in (line.birth_city, line.birth_country) if part) or 'N/A'
        return f"{header}\n{format_stat_line(line.position, line.stats)}\nBorn: {birth_place}"
