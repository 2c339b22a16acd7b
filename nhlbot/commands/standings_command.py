#!/usr/bin/env python3
"""
Standings commands for the NHL Bot
Division, conference and league tables ordered by points
"""

from typing import List, Optional

from .base_command import BaseCommand
from ..models import MeshMessage, StandingRow

DIVISION_LIMIT = 8


class StandingsCommand(BaseCommand):
    """Handles divisionstandings, conferencestandings and leaguestandings"""

    name = "standings"
    keywords = ['divisionstandings', 'conferencestandings', 'leaguestandings']
    description = "Division/conference standings for a team, or the full league (team optional)"
    usage = "divisionstandings <team>"
    category = "standings"

    async def execute(self, message: MeshMessage) -> bool:
        keyword, args = self.parse_command(message)
        if keyword == 'leaguestandings':
            return await self.league(message, args)

        abbr = await self.resolve_team_arg(message, args, f"{keyword} pens")
        if not abbr:
            return False

        if keyword == 'conferencestandings':
            rows = await self.bot.team_service.conference_standings(abbr)
            if not rows:
                return await self.send_response(message, "Could not find conference standings.")
            title = f"{rows[0].conference_name} Conference"
        else:
            rows = await self.bot.team_service.division_standings(abbr)
            if not rows:
                return await self.send_response(message, "Could not find division standings.")
            rows = rows[:DIVISION_LIMIT]
            title = f"{rows[0].division_name} Division"

        return await self.send_response(message, self.format_table(title, rows, highlight=abbr))

    async def league(self, message: MeshMessage, args: List[str]) -> bool:
        rows = await self.bot.team_service.league_standings()
        if not rows:
            return await self.send_response(message, "Could not find league standings.")

        # Team is optional here; an unknown one is simply not highlighted
        highlight = self.bot.teams.resolve_team(' '.join(args)) if args else None
        text = self.format_table("NHL League", rows, highlight=highlight)
        if highlight:
            rank = next((i for i, row in enumerate(rows, start=1) if row.abbrev == highlight), None)
            if rank:
                row = rows[rank - 1]
                text = (f"{self.bot.teams.display_name(highlight)}: #{rank} of {len(rows)}, "
                        f"{row.record}, {row.points}pts ({row.point_pctg * 100:.1f}%)\n") + text
        return await self.send_response(message, text)

    def format_table(self, title: str, rows: List[StandingRow], highlight: Optional[str] = None) -> str:
        lines = [f"{title} standings"]
        for rank, row in enumerate(rows, start=1):
            marker = '>' if row.abbrev == highlight else ''
            lines.append(f"{marker}{rank}. {row.abbrev} {row.record} {row.points}pts")
        return '\n'.join(lines)
