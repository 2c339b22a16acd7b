#!/usr/bin/env python3
"""
Recap command for the NHL Bot
Highlights link and three stars for a team's most recent game
"""

from .base_command import BaseCommand
from ..enums import RecapState
from ..models import GameRecap, MeshMessage
from ..utils import format_clean_date, to_local

NHL_GAMECENTER_URL = "https://www.nhl.com/gamecenter/{game_id}"


class RecapCommand(BaseCommand):
    """Handles the recap command"""

    name = "recap"
    keywords = ['recap']
    description = "Highlights and three stars of a team's last game"
    usage = "recap <team>"
    category = "team"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        abbr = await self.resolve_team_arg(message, args, "recap pens")
        if not abbr:
            return False

        recap = await self.bot.team_service.get_game_recap(abbr)
        if not recap:
            team_name = self.bot.teams.display_name(abbr)
            return await self.send_response(message, f"No recent games found for the {team_name}.")

        return await self.send_response(message, self.format_recap(recap, abbr))

    def format_recap(self, recap: GameRecap, abbr: str) -> str:
        game = recap.game
        teams = self.bot.teams
        local_start = to_local(game.start_time_utc, self.bot.timezone)
        lines = [
            f"{teams.display_name(abbr)} vs {teams.display_name(game.opponent_of(abbr))}",
            f"{format_clean_date(local_start)}: {game.away_abbrev} {game.away_score or 0} "
            f"@ {game.home_abbrev} {game.home_score or 0}",
        ]

        video = recap.video
        if recap.state is RecapState.EMBEDDABLE:
            lines.append(f"Highlights: {video.url}")
        elif recap.state is RecapState.SEARCH:
            if video.no_video_found:
                lines.append("No exact video match, try this search:")
            lines.append(video.url)
        else:
            lines.append(f"No video yet. NHL.com: {NHL_GAMECENTER_URL.format(game_id=game.game_id)}")

        if recap.stars:
            lines.append("Three stars:")
            for i, star in enumerate(recap.stars, start=1):
                team = f" ({star.team_abbrev})" if star.team_abbrev else ""
                lines.append(f"{i}* {star.name}{team}")
        return '\n'.join(lines)
