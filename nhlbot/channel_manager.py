#!/usr/bin/env python3
"""
Channel management functionality for the NHL Bot
Reads the node's configured channels once at startup and maps names to indexes
"""

import asyncio
import os
import sys
from typing import Any, Dict, List, Optional

from meshcore import EventType

EMPTY_CHANNEL_SECRET = bytes(16)


class ChannelManager:
    """Manages channel operations and information"""

    def __init__(self, bot, max_channels: int = 40):
        """
        Initialize the channel manager

        Args:
            bot: The NHL bot instance
            max_channels: Maximum number of channel slots to query (default 40)
        """
        self.bot = bot
        self.logger = bot.logger
        self.max_channels = max_channels
        self._channels_cache: Dict[int, Dict[str, Any]] = {}
        self._fetch_timeout = 2.0

    async def fetch_channels(self):
        """Fetch channels from the MeshCore node"""
        self.logger.info("Fetching channels from MeshCore node...")
        try:
            # Wait a moment for the device to be ready
            await asyncio.sleep(2)
            channels = await self.fetch_all_channels()
            self.logger.info(f"Successfully fetched {len(channels)} channels from MeshCore node")
            for channel in channels:
                self.logger.info(f"  Channel {channel.get('channel_idx', '?')}: {channel.get('channel_name')}")
        except Exception as e:
            self.logger.error(f"Failed to fetch channels: {e}")

    async def fetch_all_channels(self) -> List[Dict[str, Any]]:
        """Query every channel slot in turn, stopping early if the device never answers"""
        if not getattr(self.bot, 'connected', False):
            self.logger.warning("Device not connected, skipping channel fetch")
            return []

        self._channels_cache.clear()
        consecutive_timeouts = 0
        max_consecutive_timeouts = 3

        for channel_idx in range(self.max_channels):
            result = await self._fetch_single_channel(channel_idx)
            if result is not None:
                consecutive_timeouts = 0
                if result.get('channel_name'):
                    self._channels_cache[channel_idx] = result
            else:
                consecutive_timeouts += 1
                if consecutive_timeouts >= max_consecutive_timeouts and channel_idx < max_consecutive_timeouts:
                    self.logger.warning(f"First {max_consecutive_timeouts} channels all timed out - "
                                        f"device may be unresponsive, aborting fetch")
                    break

            # Small delay between requests to avoid overwhelming the device
            await asyncio.sleep(0.1)

        return self.get_configured_channels()

    async def _fetch_single_channel(self, channel_idx: int) -> Optional[Dict[str, Any]]:
        """Channel info payload for one slot; an empty dict for an unused slot, None on timeout"""
        channel_event = None
        event_received = asyncio.Event()

        async def on_channel_info(event):
            nonlocal channel_event
            if event.payload.get('channel_idx') == channel_idx:
                channel_event = event
                event_received.set()

        try:
            subscription = self.bot.meshcore.subscribe(EventType.CHANNEL_INFO, on_channel_info)
            try:
                from meshcore_cli.meshcore_cli import next_cmd

                # next_cmd prints the raw JSON reply
                with open(os.devnull, 'w') as devnull:
                    old_stdout = sys.stdout
                    sys.stdout = devnull
                    try:
                        await next_cmd(self.bot.meshcore, ["get_channel", str(channel_idx)])
                    finally:
                        sys.stdout = old_stdout

                await asyncio.wait_for(event_received.wait(), timeout=self._fetch_timeout)
            finally:
                self.bot.meshcore.unsubscribe(subscription)

        except asyncio.TimeoutError:
            self.logger.debug(f"Timeout waiting for channel {channel_idx} response")
            return None
        except Exception as e:
            self.logger.debug(f"Error fetching channel {channel_idx}: {e}")
            return None

        payload = channel_event.payload if channel_event else None
        if not payload or payload.get('channel_secret') == EMPTY_CHANNEL_SECRET:
            return {}
        return payload

    def register_channel(self, channel_idx: int, channel_name: str):
        self._channels_cache[channel_idx] = {'channel_idx': channel_idx, 'channel_name': channel_name}

    def get_configured_channels(self) -> List[Dict[str, Any]]:
        return [self._channels_cache[idx] for idx in sorted(self._channels_cache)]

    def get_channel_name(self, channel_num: int) -> str:
        """Get channel name from channel number"""
        if channel_num in self._channels_cache:
            return self._channels_cache[channel_num].get('channel_name', f"Channel{channel_num}")
        self.logger.warning(f"Channel {channel_num} not found in cached channels")
        return f"Channel{channel_num}"

    def get_channel_number(self, channel_name: str) -> Optional[int]:
        """Channel number for a name, or None (to distinguish from channel 0)"""
        for num, channel_info in self._channels_cache.items():
            if channel_info.get('channel_name', '').lower() == (channel_name or '').lower():
                return num
        self.logger.warning(f"Channel name '{channel_name}' not found in cached channels")
        return None
