#!/usr/bin/env python3
"""
Countdown site command for the NHL Bot
"""

from .base_command import BaseCommand
from ..models import MeshMessage

COUNTDOWN_SITE_URL = "https://tomcourt89.github.io/NHL-Countdown/"


class CountdownSiteCommand(BaseCommand):
    """Links the NHL countdown website"""

    name = "countdownsite"
    keywords = ['countdownsite']
    description = "Link to live countdowns for every upcoming game"
    usage = "countdownsite"
    category = "schedule"

    async def execute(self, message: MeshMessage) -> bool:
        return await self.send_response(message, f"NHL Countdown: {COUNTDOWN_SITE_URL}")
