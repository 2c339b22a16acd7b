#!/usr/bin/env python3
"""
Base command class for all NHL Bot commands
Provides common functionality and interface for command implementations
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..enums import GameType
from ..models import MeshMessage
from ..seasons import group_by_season


class BaseCommand(ABC):
    """Base class for all bot commands - Plugin Interface"""

    # Plugin metadata - to be overridden by subclasses
    name: str = ""
    keywords: List[str] = []  # All trigger words for this command
    description: str = ""
    usage: str = ""
    requires_dm: bool = False
    category: str = "general"

    def __init__(self, bot):
        self.bot = bot
        self.logger = bot.logger

    @abstractmethod
    async def execute(self, message: MeshMessage) -> bool:
        """Execute the command with the given message"""
        pass

    def get_help_text(self) -> str:
        """Get help text for this command"""
        text = self.description or "No help available for this command."
        if self.usage:
            text += f" Usage: {self.prefix}{self.usage}"
        return text

    def can_execute(self, message: MeshMessage) -> bool:
        """Check if this command can be executed with the given message"""
        if self.requires_dm and not message.is_dm:
            return False
        return True

    def get_metadata(self) -> Dict[str, Any]:
        """Get plugin metadata for discovery and registration"""
        return {
            'name': self.name,
            'keywords': self.keywords,
            'description': self.description,
            'usage': self.usage,
            'requires_dm': self.requires_dm,
            'category': self.category,
            'class_name': self.__class__.__name__,
            'module_name': self.__class__.__module__
        }

    @property
    def prefix(self) -> str:
        return self.bot.config.get('Bot', 'command_prefix', fallback='!')

    def parse_command(self, message: MeshMessage) -> Tuple[str, List[str]]:
        """Split a message into (keyword, args) with the command prefix removed"""
        content = message.content.strip()
        if self.prefix and content.startswith(self.prefix):
            content = content[len(self.prefix):].strip()
        parts = content.split()
        if not parts:
            return '', []
        return parts[0].lower(), parts[1:]

    def split_playoffs_flag(self, args: List[str]) -> Tuple[List[str], bool]:
        """Strip a trailing 'playoffs' argument"""
        if args and args[-1].lower() == 'playoffs':
            return args[:-1], True
        return args, False

    async def resolve_team_arg(self, message: MeshMessage, args: List[str], example: str) -> Optional[str]:
        """Resolve the team argument, replying with usage or an error when it cannot be"""
        if not args:
            await self.send_response(message, f"Please specify a team! Example: {self.prefix}{example}")
            return None

        team_input = ' '.join(args)
        abbr = self.bot.teams.resolve_team(team_input)
        if not abbr:
            await self.send_response(
                message,
                f"Sorry, I don't recognize the team \"{team_input}\". Use {self.prefix}commands to see supported teams."
            )
            return None
        return abbr

    def requested_count(self, keyword: str) -> int:
        """Game count encoded in keywords such as 'teampast10'"""
        digits = ''.join(ch for ch in keyword if ch.isdigit())
        return int(digits) if digits else 5

    def format_season_sections(self, games: List[Any], is_playoffs: bool,
                               format_line: Callable[[Any], str]) -> List[str]:
        """Game lines, with a divider before each season when several are shown"""
        groups = group_by_season(games)
        label = GameType.for_request(is_playoffs).label
        lines = []
        for season, season_games in groups:
            if len(groups) > 1:
                lines.append(f"-- {season} {label} --")
            lines.extend(format_line(game) for game in season_games)
        return lines

    async def require_player_query(self, message: MeshMessage, args: List[str], example: str) -> Optional[str]:
        """Joined player name argument, replying with usage when it is missing"""
        query = ' '.join(args).strip()
        if not query:
            await self.send_response(message, f"Please specify a player name! Example: {self.prefix}{example}")
            return None
        return query

    async def send_response(self, message: MeshMessage, content: str) -> bool:
        """Unified method for sending responses to users"""
        try:
            return await self.bot.command_manager.send_response(message, content)
        except Exception as e:
            self.logger.error(f"Failed to send response: {e}")
            return False
