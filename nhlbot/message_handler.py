#!/usr/bin/env python3
"""
Message handling functionality for the NHL Bot
Turns MeshCore receive events into MeshMessages and routes them to the command manager
"""

from typing import Any, Dict, Optional, Tuple

from .models import MeshMessage

DIRECT_PATH_LEN = 255


def _signal_value(payload: Dict[str, Any], metadata: Optional[Dict[str, Any]], *names: str):
    """First SNR/RSSI style field found in the payload, then in the event metadata"""
    for source in (payload, metadata or {}):
        for name in names:
            if name in source:
                return source.get(name)
    return None


def split_channel_text(text: str) -> Tuple[str, str]:
    """Split channel text in "SENDER: message" form into (sender, message)"""
    if ':' in text and not text.startswith(':'):
        sender, _, content = text.partition(':')
        if sender.strip():
            return sender.strip(), content.strip()
    return "Channel User", text


def describe_path(path_len: Optional[int]) -> Tuple[int, str]:
    """(hops, readable path) from a received path length"""
    if path_len is None or path_len == DIRECT_PATH_LEN or path_len == 0:
        return 0, "Direct (0 hops)"
    return path_len, f"Routed through {path_len} hops"


class MessageHandler:
    """Handles incoming messages and routes them to command processors"""

    def __init__(self, bot):
        self.bot = bot
        self.logger = bot.logger

    def lookup_contact_name(self, pubkey_prefix: str) -> str:
        """Contact name for a public key prefix, or the prefix itself"""
        contacts = getattr(self.bot.meshcore, 'contacts', None) or {}
        for contact_data in contacts.values():
            if pubkey_prefix and contact_data.get('public_key', '').startswith(pubkey_prefix):
                return contact_data.get('name', contact_data.get('adv_name', pubkey_prefix))
        return pubkey_prefix

    async def handle_contact_message(self, event, metadata=None):
        """Handle incoming contact message (DM)"""
        try:
            payload = event.payload
            self.logger.debug(f"Contact message payload: {payload}")
            self.logger.info(f"Received DM from {payload.get('pubkey_prefix', 'unknown')}: {payload.get('text', '')}")

            hops, path_info = describe_path(payload.get('path_len', DIRECT_PATH_LEN))
            message = MeshMessage(
                content=payload.get('text', ''),
                sender_id=self.lookup_contact_name(payload.get('pubkey_prefix', '')),
                is_dm=True,
                timestamp=payload.get('sender_timestamp'),
                snr=_signal_value(payload, metadata, 'SNR', 'snr'),
                rssi=_signal_value(payload, metadata, 'RSSI', 'rssi'),
                hops=hops,
                path=path_info,
            )
            await self.process_message(message)

        except Exception as e:
            self.logger.error(f"Error handling contact message: {e}")

    async def handle_channel_message(self, event, metadata=None):
        """Handle incoming channel message"""
        try:
            payload = event.payload
            self.logger.debug(f"Channel message payload: {payload}")

            text = payload.get('text', '')
            sender_id, content = split_channel_text(text)
            channel_name = self.bot.channel_manager.get_channel_name(payload.get('channel_idx', 0))
            self.logger.info(f"Received channel message ({channel_name}) from {sender_id}: {text}")

            hops, path_info = describe_path(payload.get('path_len', DIRECT_PATH_LEN))
            message = MeshMessage(
                content=content,
                sender_id=sender_id,
                channel=channel_name,
                is_dm=False,
                timestamp=payload.get('sender_timestamp'),
                snr=_signal_value(payload, metadata, 'SNR', 'snr'),
                rssi=_signal_value(payload, metadata, 'RSSI', 'rssi'),
                hops=hops,
                path=path_info,
            )
            await self.process_message(message)

        except Exception as e:
            self.logger.error(f"Error handling channel message: {e}")

    async def process_message(self, message: MeshMessage):
        """Process a received message"""
        if not self.should_process_message(message):
            return

        self.logger.debug(f"Processing message: {message.content}")
        await self.bot.command_manager.execute_commands(message)

    def should_process_message(self, message: MeshMessage) -> bool:
        """Check if message should be processed by the bot"""
        if not self.bot.config.getboolean('Bot', 'enabled', fallback=True):
            return False

        if message.sender_id and message.sender_id in self.bot.command_manager.banned_users:
            self.logger.debug(f"Ignoring message from banned user: {message.sender_id}")
            return False

        monitor_channels = self.bot.command_manager.monitor_channels
        if not message.is_dm and message.channel and message.channel not in monitor_channels:
            self.logger.debug(f"Channel {message.channel} not in monitored channels: {monitor_channels}")
            return False

        if message.is_dm and not self.bot.config.getboolean('Channels', 'respond_to_dms', fallback=True):
            self.logger.debug("DMs are disabled")
            return False

        return True
