#!/usr/bin/env python3
"""
Help command for the NHL Bot
Lists the available commands or shows details for one of them
"""

from .base_command import BaseCommand
from ..models import MeshMessage

CATEGORY_ORDER = ['schedule', 'team', 'player', 'standings', 'news', 'basic']


class HelpCommand(BaseCommand):
    """Handles the help and commands keywords"""

    name = "help"
    keywords = ['help', 'commands']
    description = "Lists commands. Use help <command> for details."
    usage = "help [command]"
    category = "basic"

    async def execute(self, message: MeshMessage) -> bool:
        _, args = self.parse_command(message)
        if args:
            return await self.send_response(message, self.get_specific_help(args[0]))
        return await self.send_response(message, self.get_general_help())

    def get_specific_help(self, command_name: str) -> str:
        return self.bot.command_manager.get_help_for_command(command_name.lower())

    def get_available_commands_list(self) -> str:
        """Command keywords grouped by category, one line per category"""
        grouped = {}
        for command in self.bot.command_manager.commands.values():
            grouped.setdefault(command.category, []).extend(command.keywords)

        lines = []
        ordered = CATEGORY_ORDER + sorted(c for c in grouped if c not in CATEGORY_ORDER)
        for category in ordered:
            keywords = grouped.get(category)
            if keywords:
                lines.append(f"{category.title()}: " + ', '.join(f"{self.prefix}{k}" for k in keywords))
        return '\n'.join(lines)

    def get_general_help(self) -> str:
        help_text = "NHL Bot commands\n"
        help_text += self.get_available_commands_list()
        help_text += "\nTeams: name, city or abbr (pens, seattle, WSH)"
        help_text += "\nAdd 'playoffs' to past-games commands"
        return help_text
