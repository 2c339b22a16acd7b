#!/usr/bin/env python3
"""
Previous game command for the NHL Bot
Shows the most recent finished game for a team
"""

from .base_command import BaseCommand
from ..aggregates import team_game_result
from ..enums import GameResult
from ..models import MeshMessage
from ..utils import format_clean_date, to_local

RESULT_WORDS = {
    GameResult.WIN: "WIN",
    GameResult.LOSS: "LOSS",
    GameResult.OT_LOSS: "OT LOSS",
}


class PreviousGameCommand(BaseCommand):
    """Handles the previousgame command"""

    name = "previousgame"
    keywords = ['previousgame']
    description = "Most recent game result for a team"
    usage = "previousgame <team>"
    category = "team"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        abbr = await self.resolve_team_arg(message, args, "previousgame pens")
        if not abbr:
            return False

        team_name = self.bot.teams.display_name(abbr)
        game = await self.bot.team_service.get_previous_game(abbr)
        if not game:
            return await self.send_response(message, f"No recent games found for the {team_name}.")

        opponent_abbr = game.opponent_of(abbr)
        team_score, opponent_score = game.scores_for(abbr)
        result = RESULT_WORDS.get(team_game_result(game, abbr), "FINAL")
        overtime = f" ({game.last_period_type})" if game.went_to_overtime else ""
        local_start = to_local(game.start_time_utc, self.bot.timezone)

        response = (
            f"{team_name} previous game\n"
            f"{result}{overtime}: {'vs' if game.is_home(abbr) else '@'} "
            f"{self.bot.teams.display_name(opponent_abbr)}\n"
            f"{abbr} {team_score} - {opponent_abbr} {opponent_score}\n"
            f"{local_start.strftime('%A')}, {format_clean_date(local_start)}"
        )
        return await self.send_response(message, response)
