#!/usr/bin/env python3
"""
Command management functionality for the NHL Bot
Dispatches prefixed messages to command plugins and delivers their replies
"""

import asyncio
from typing import List, Optional

from meshcore import EventType

from .commands.base_command import BaseCommand
from .models import MeshMessage
from .plugin_loader import PluginLoader
from .utils import split_message

ERROR_REPLY = "Sorry, there was an error processing your request. Please try again later."


class CommandManager:
    """Manages all bot commands and responses using dynamic plugin loading"""

    def __init__(self, bot):
        self.bot = bot
        self.logger = bot.logger

        self.banned_users = self.load_banned_users()
        self.monitor_channels = self.load_monitor_channels()

        self.plugin_loader = PluginLoader(bot)
        self.commands = self.plugin_loader.load_all_plugins()

        self.logger.info(f"CommandManager initialized with {len(self.commands)} plugins")

    @property
    def prefix(self) -> str:
        return self.bot.config.get('Bot', 'command_prefix', fallback='!')

    def load_banned_users(self) -> List[str]:
        """Load banned users from config"""
        banned = self.bot.config.get('Banned_Users', 'banned_users', fallback='')
        return [user.strip() for user in banned.split(',') if user.strip()]

    def load_monitor_channels(self) -> List[str]:
        """Load monitored channels from config"""
        channels = self.bot.config.get('Channels', 'monitor_channels', fallback='')
        return [channel.strip() for channel in channels.split(',') if channel.strip()]

    async def send_dm(self, recipient_id: str, content: str) -> bool:
        """Send a direct message using meshcore-cli"""
        if not self.bot.connected or not self.bot.meshcore:
            return False

        try:
            # recipient_id is the contact name
            contact = self.bot.meshcore.get_contact_by_name(recipient_id)
            if not contact:
                self.logger.error(f"Contact not found for name: {recipient_id}")
                return False

            contact_name = contact.get('name', contact.get('adv_name', recipient_id))
            self.logger.info(f"Sending DM to {contact_name}: {content}")

            from meshcore_cli.meshcore_cli import send_msg
            result = await send_msg(self.bot.meshcore, contact, content)

            if not result:
                self.logger.error("Failed to send DM: No result returned")
                return False
            if getattr(result, 'type', None) == EventType.ERROR:
                self.logger.error(f"Failed to send DM: {result.payload}")
                return False

            self.logger.info(f"Successfully sent DM to {contact_name}")
            return True

        except Exception as e:
            self.logger.error(f"Failed to send DM: {e}")
            return False

    async def send_channel_message(self, channel: str, content: str) -> bool:
        """Send a channel message using meshcore-cli"""
        if not self.bot.connected or not self.bot.meshcore:
            return False

        try:
            channel_num = self.bot.channel_manager.get_channel_number(channel)
            if channel_num is None:
                self.logger.error(f"Cannot send to unknown channel: {channel}")
                return False
            self.logger.info(f"Sending channel message to {channel} (channel {channel_num}): {content}")

            from meshcore_cli.meshcore_cli import send_chan_msg
            result = await send_chan_msg(self.bot.meshcore, channel_num, content)

            if result and result.type != EventType.ERROR:
                self.logger.info(f"Successfully sent channel message to {channel} (channel {channel_num})")
                return True

            self.logger.error(f"Failed to send channel message: {result.payload if result else 'No result'}")
            return False

        except Exception as e:
            self.logger.error(f"Failed to send channel message: {e}")
            return False

    async def _send_one(self, message: MeshMessage, content: str) -> bool:
        if message.is_dm:
            return await self.send_dm(message.sender_id, content)
        return await self.send_channel_message(message.channel, content)

    async def send_response(self, message: MeshMessage, content: str) -> bool:
        """Reply where the message came from, split into transport-sized chunks"""
        max_length = self.bot.config.getint('Bot', 'max_message_length', fallback=130)
        delay = self.bot.config.getfloat('Bot', 'message_delay_seconds', fallback=2.0)

        chunks = split_message(content, max_length)
        success = True
        try:
            for i, chunk in enumerate(chunks):
                if i > 0 and delay > 0:
                    await asyncio.sleep(delay)
                success = await self._send_one(message, chunk) and success
        except Exception as e:
            self.logger.error(f"Failed to send response: {e}")
            return False
        return success

    def get_command_keyword(self, content: str) -> Optional[str]:
        """First token of a prefixed message, lowercased; None when not a command"""
        content = content.strip()
        if not self.prefix or not content.startswith(self.prefix):
            return None
        parts = content[len(self.prefix):].split()
        return parts[0].lower() if parts else None

    async def execute_commands(self, message: MeshMessage) -> bool:
        """Run the plugin whose keyword matches the message exactly; False when none does"""
        keyword = self.get_command_keyword(message.content)
        if not keyword:
            return False

        command = self.plugin_loader.get_plugin_by_keyword(keyword)
        if not command:
            self.logger.debug(f"No command registered for keyword '{keyword}'")
            return False

        self.logger.info(f"Command '{command.name}' matched, executing")
        if not command.can_execute(message):
            if command.requires_dm and not message.is_dm:
                await self.send_response(message, f"Command '{command.name}' can only be used in DMs")
            return True

        try:
            await command.execute(message)
        except Exception as e:
            self.logger.error(f"Error executing command '{command.name}': {e}", exc_info=True)
            await self.send_response(message, ERROR_REPLY)
        return True

    def get_help_for_command(self, command_name: str) -> str:
        """Compact help text for one command keyword"""
        command = self.get_plugin_by_keyword(command_name.lstrip(self.prefix))
        if command:
            return f"{self.prefix}{command_name.lstrip(self.prefix)}: {command.get_help_text()}"
        return f"Unknown command: {command_name}. Use {self.prefix}commands for the list."

    def get_plugin_by_keyword(self, keyword: str) -> Optional[BaseCommand]:
        return self.plugin_loader.get_plugin_by_keyword(keyword)

    def get_plugin_by_name(self, name: str) -> Optional[BaseCommand]:
        return self.plugin_loader.get_plugin_by_name(name)
