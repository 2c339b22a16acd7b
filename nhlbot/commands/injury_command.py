#!/usr/bin/env python3
"""
Injury command for the NHL Bot
Injury details for players whose name matches the query
"""

from .base_command import BaseCommand
from ..models import InjuryEntry, MeshMessage, parse_utc
from ..utils import format_clean_date, truncate_string

MAX_MATCHES = 5
COMMENT_LENGTH = 200


def _short_date(value) -> str:
    parsed = parse_utc(value)
    return f"{format_clean_date(parsed)}, {parsed.year}" if parsed else 'Unknown'


class InjuryCommand(BaseCommand):
    """Handles the injury command"""

    name = "injury"
    keywords = ['injury']
    description = "Injury details for a player"
    usage = "injury <player>"
    category = "news"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        query = await self.require_player_query(message, args, "injury malkin")
        if not query:
            return False

        matches = await self.bot.injury_service.search_player_injury(query)
        if not matches:
            return await self.send_response(
                message,
                f"No injury information found for \"{query}\". "
                f"The player may not be injured or the name wasn't recognized."
            )

        blocks = []
        if len(matches) > MAX_MATCHES:
            blocks.append(f"Found {len(matches)} players matching \"{query}\". Showing first {MAX_MATCHES}:")
        blocks.extend(self.format_entry(entry) for entry in matches[:MAX_MATCHES])
        return await self.send_response(message, '\n'.join(blocks))

    def format_entry(self, entry: InjuryEntry) -> str:
        lines = [
            f"{entry.player_name} ({entry.team_name})",
            f"{entry.status}: {entry.injury_type}, updated {_short_date(entry.updated)}",
        ]
        if entry.return_date:
            lines.append(f"Expected return: {_short_date(entry.return_date)}")
        if entry.comment:
            lines.append(truncate_string(entry.comment, COMMENT_LENGTH))
        return '\n'.join(lines)
