#!/usr/bin/env python3
"""
Team past games commands for the NHL Bot
Last 5/10/20 finished games for a team with aggregate totals
"""

from .base_command import BaseCommand
from ..aggregates import aggregate_team, team_game_result
from ..models import MeshMessage, TeamGame
from ..utils import format_clean_date, signed, to_local


class TeamPastCommand(BaseCommand):
    """Handles teampast5, teampast10 and teampast20"""

    name = "teampast"
    keywords = ['teampast5', 'teampast10', 'teampast20']
    description = "Last 5/10/20 games for a team, add 'playoffs' for playoff games"
    usage = "teampast5 <team> [playoffs]"
    category = "team"

    async def execute(self, message: MeshMessage) -> bool:
        keyword, args = self.parse_command(message)
        count = self.requested_count(keyword)
        team_args, is_playoffs = self.split_playoffs_flag(args)
        if not args:
            await self.send_response(
                message,
                f"Please specify a team! Example: {self.prefix}{keyword} pens or {self.prefix}{keyword} pens playoffs"
            )
            return False

        abbr = await self.resolve_team_arg(message, team_args, f"{keyword} pens")
        if not abbr:
            return False

        team_name = self.bot.teams.display_name(abbr)
        games = await self.bot.team_service.get_team_past_games(abbr, count, is_playoffs)
        if not games:
            game_type = 'playoff' if is_playoffs else 'regular season'
            return await self.send_response(message, f"No recent {game_type} games found for the {team_name}.")

        totals = aggregate_team(games, abbr)
        title = 'Playoff' if is_playoffs else 'Regular Season'
        lines = [f"{team_name} last {len(games)} {title} games"]
        lines.extend(self.format_season_sections(games, is_playoffs, lambda game: self.format_game(game, abbr)))
        lines.append(f"Record: {totals.record} | GF {totals.goals_for} GA {totals.goals_against} "
                     f"({signed(totals.goal_differential)})")
        lines.append(f"GF/G {totals.goals_for_per_game} GA/G {totals.goals_against_per_game}")
        if len(games) < count:
            lines.append(f"(Only {len(games)} {'playoff ' if is_playoffs else ''}games found)")
        return await self.send_response(message, '\n'.join(lines))

    def format_game(self, game: TeamGame, abbr: str) -> str:
        team_score, opponent_score = game.scores_for(abbr)
        location = 'vs' if game.is_home(abbr) else '@'
        overtime = f" ({game.last_period_type})" if game.went_to_overtime else ""
        date_str = format_clean_date(to_local(game.start_time_utc, self.bot.timezone)) if game.start_time_utc else '?'
        return (f"{date_str} {location} {game.opponent_of(abbr)}: {team_game_result(game, abbr).value} "
                f"{team_score}-{opponent_score}{overtime}")
