#!/usr/bin/env python3
"""
Core NHL Bot functionality
Contains the main bot class: configuration, logging, data services and the MeshCore connection
"""

import asyncio
import configparser
import logging
from pathlib import Path

import colorlog

# Import the official meshcore package
import meshcore
from meshcore import EventType

from .cache import FeedCaches
from .channel_manager import ChannelManager
from .clients import ESPNInjuriesClient, NewsFeedClient, NHLSearchClient, NHLWebClient, YouTubeSearchClient
from .command_manager import CommandManager
from .http import HTTPClient
from .message_handler import MessageHandler
from .services import InjuryService, NewsService, PlayerService, RecapFinder, TeamService
from .teams import TeamDirectory
from .utils import get_timezone

DEFAULT_CONFIG = """[Connection]
# Options: ble, serial
connection_type = ble
ble_device_name = MeshCore
serial_port = /dev/ttyUSB0
timeout = 30

[Bot]
bot_name = NHLBot
enabled = true
command_prefix = !
# Replies longer than this are split into several messages
max_message_length = 130
message_delay_seconds = 2.0
# Timezone for game times (e.g. America/New_York); empty uses the system timezone
timezone =

[Channels]
monitor_channels = NHL
respond_to_dms = true

[Banned_Users]
banned_users =

[Logging]
log_level = INFO
log_file = nhl_bot.log
colored_output = true
meshcore_log_level = INFO

[Http]
timeout = 15
user_agent = MeshCore-NHL-Bot/1.0

[Cache]
injuries_ttl_seconds = 300
news_ttl_seconds = 600
single_flight = true

[Recap]
# YouTube Data API key for highlight lookups; YOUTUBE_API_KEY is used when empty
youtube_api_key =
"""


class NHLBot:
    """NHL Bot on a MeshCore node using the official meshcore package"""

    def __init__(self, config_file: str = "config.ini"):
        self.config_file = config_file
        self.config = configparser.ConfigParser()
        self.load_config()

        self.setup_logging()

        # Connection
        self.meshcore = None
        self.connected = False

        self.timezone = get_timezone(self.config)
        self.teams = TeamDirectory()
        self.setup_services()

        self.message_handler = MessageHandler(self)
        self.command_manager = CommandManager(self)
        self.channel_manager = ChannelManager(self)

        self.logger.info(f"NHL Bot initialized: {self.config.get('Bot', 'bot_name', fallback='NHLBot')}")

    def load_config(self):
        """Load configuration from file"""
        if not Path(self.config_file).exists():
            self.create_default_config()

        self.config.read(self.config_file)

    def create_default_config(self):
        """Create default configuration file"""
        with open(self.config_file, 'w') as f:
            f.write(DEFAULT_CONFIG)
        # Logger is not configured yet
        print(f"Created default config file: {self.config_file}")

    def setup_logging(self):
        """Setup logging configuration"""
        log_level = getattr(logging, self.config.get('Logging', 'log_level', fallback='INFO').upper(), logging.INFO)

        if self.config.getboolean('Logging', 'colored_output', fallback=True):
            formatter = colorlog.ColoredFormatter(
                '%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S',
                log_colors={
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                }
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        self.logger = logging.getLogger('NHLBot')
        self.logger.setLevel(log_level)
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        log_file = self.config.get('Logging', 'log_file', fallback='nhl_bot.log')
        if log_file:
            file_handler = logging.FileHandler(log_file)
            # No color codes in the file
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

        self.logger.propagate = False

        # meshcore library logging is configured separately from the bot
        meshcore_log_level = getattr(logging, self.config.get('Logging', 'meshcore_log_level', fallback='INFO').upper(),
                                     logging.INFO)
        for logger_name in ['meshcore', 'meshcore_cli', 'meshcore.meshcore', 'meshcore_cli.meshcore_cli']:
            logger = logging.getLogger(logger_name)
            logger.setLevel(meshcore_log_level)
            logger.handlers.clear()
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        self.logger.info(f"Logging configured - Bot: {logging.getLevelName(log_level)}, "
                         f"MeshCore: {logging.getLevelName(meshcore_log_level)}")

    def setup_services(self):
        """Create the HTTP session holder, remote clients, caches and services"""
        self.http = HTTPClient.from_config(self.config, self.logger)

        self.nhl_client = NHLWebClient(self.http)
        self.search_client = NHLSearchClient(self.http)
        self.youtube_client = YouTubeSearchClient.from_config(self.http, self.config)
        if not self.youtube_client.enabled:
            self.logger.info("No YouTube API key configured, recaps will link to a highlight search")

        self.caches = FeedCaches.from_config(self.config)
        self.recap_finder = RecapFinder(self.youtube_client, self.teams, log=self.logger)

        self.team_service = TeamService(self.nhl_client, self.teams, self.recap_finder, logger=self.logger)
        self.player_service = PlayerService(self.nhl_client, self.search_client, self.teams, logger=self.logger)
        self.injury_service = InjuryService(ESPNInjuriesClient(self.http), self.caches.injuries, logger=self.logger)
        self.news_service = NewsService(NewsFeedClient(self.http), self.caches.news, self.teams, logger=self.logger)

    async def connect(self) -> bool:
        """Connect to MeshCore node using official package"""
        try:
            self.logger.info("Connecting to MeshCore node...")

            connection_type = self.config.get('Connection', 'connection_type', fallback='ble').lower()
            self.logger.info(f"Using connection type: {connection_type}")

            if connection_type == 'serial':
                serial_port = self.config.get('Connection', 'serial_port', fallback='/dev/ttyUSB0')
                self.logger.info(f"Connecting via serial port: {serial_port}")
                self.meshcore = await meshcore.MeshCore.create_serial(serial_port, debug=False)
            else:
                ble_device_name = self.config.get('Connection', 'ble_device_name', fallback=None)
                self.logger.info("Connecting via BLE" + (f" to device: {ble_device_name}" if ble_device_name else ""))
                self.meshcore = await meshcore.MeshCore.create_ble(device_name=ble_device_name, debug=False)

            if self.meshcore and self.meshcore.is_connected:
                self.connected = True
                self.logger.info(f"Connected to: {self.meshcore.self_info}")

                await self.wait_for_contacts()
                await self.channel_manager.fetch_channels()
                await self.setup_message_handlers()
                return True

            self.logger.error("Failed to connect to MeshCore node")
            return False

        except Exception as e:
            self.logger.error(f"Connection failed: {e}")
            return False

    async def wait_for_contacts(self):
        """Load contacts so DM senders can be resolved by name"""
        self.logger.info("Waiting for contacts to load...")
        try:
            from meshcore_cli.meshcore_cli import next_cmd
            result = await next_cmd(self.meshcore, ["contacts"])
            self.logger.info(f"Contacts command result: {len(result) if result else 0} contacts")
        except Exception as e:
            self.logger.warning(f"Error manually loading contacts: {e}")

        max_wait = self.config.getint('Connection', 'timeout', fallback=30)
        wait_time = 0
        while wait_time < max_wait:
            if hasattr(self.meshcore, 'contacts'):
                self.logger.info(f"Contacts loaded: {len(self.meshcore.contacts)} contacts")
                return
            await asyncio.sleep(5)
            wait_time += 5
            self.logger.info(f"Still waiting for contacts... ({wait_time}s)")

        self.logger.warning(f"Contacts not loaded after {max_wait} seconds, proceeding anyway")

    async def setup_message_handlers(self):
        """Setup event handlers for messages"""
        async def on_contact_message(event, metadata=None):
            await self.message_handler.handle_contact_message(event, metadata)

        async def on_channel_message(event, metadata=None):
            await self.message_handler.handle_channel_message(event, metadata)

        self.meshcore.subscribe(EventType.CONTACT_MSG_RECV, on_contact_message)
        self.meshcore.subscribe(EventType.CHANNEL_MSG_RECV, on_channel_message)

        await self.meshcore.start_auto_message_fetching()
        self.logger.info("Message handlers setup complete")

    async def start(self):
        """Start the bot"""
        self.logger.info("Starting NHL Bot...")

        if not await self.connect():
            self.logger.error("Failed to connect to MeshCore node")
            await self.http.close()
            return

        self.logger.info("Bot is running. Press Ctrl+C to stop.")
        try:
            while self.connected:
                await asyncio.sleep(1)
        except KeyboardInterrupt:
            self.logger.info("Received interrupt signal")
        finally:
            await self.stop()

    async def stop(self):
        """Stop the bot"""
        self.logger.info("Stopping NHL Bot...")
        self.connected = False

        if self.meshcore:
            await self.meshcore.disconnect()
            self.meshcore = None

        await self.http.close()
        self.logger.info("Bot stopped")
