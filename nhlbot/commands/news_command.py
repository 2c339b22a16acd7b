#!/usr/bin/env python3
"""
News command for the NHL Bot
Latest league or team headlines from Pro Hockey Rumors
"""

from typing import List

from .base_command import BaseCommand
from ..models import MeshMessage, NewsItem
from ..utils import format_clean_date, to_local

ARTICLE_LIMIT = 5


class NewsCommand(BaseCommand):
    """Handles the news command"""

    name = "news"
    keywords = ['news']
    description = "Latest NHL news, or news for one team"
    usage = "news [team]"
    category = "news"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        if not args:
            items = await self.bot.news_service.get_news()
            if not items:
                return await self.send_response(message, "No recent NHL news found.")
            return await self.send_response(message, self.format_items("NHL news", items))

        abbr = await self.resolve_team_arg(message, args, "news pens")
        if not abbr:
            return False

        team_name = self.bot.teams.display_name(abbr)
        items = await self.bot.news_service.get_team_news(abbr)
        if not items:
            return await self.send_response(
                message,
                f"No recent news found for the {team_name}. Use {self.prefix}news for league news."
            )
        return await self.send_response(message, self.format_items(f"{team_name} news", items))

    def format_items(self, title: str, items: List[NewsItem]) -> str:
        lines = [title]
        for item in items[:ARTICLE_LIMIT]:
            published = ''
            if item.published:
                published = f"{format_clean_date(to_local(item.published, self.bot.timezone))}: "
            lines.append(f"{published}{item.title}")
            lines.append(item.link)
        return '\n'.join(lines)
