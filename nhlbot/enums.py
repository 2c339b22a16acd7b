#!/usr/bin/env python3
"""
Enums for the NHL Bot
Game types and result codes as used by the NHL web API
"""

from enum import Enum


class GameType(Enum):
    """Game types - matches the NHL API gameType codes"""
    PRESEASON = 1
    REGULAR = 2
    PLAYOFF = 3

    @classmethod
    def for_request(cls, is_playoffs: bool) -> "GameType":
        return cls.PLAYOFF if is_playoffs else cls.REGULAR

    @property
    def label(self) -> str:
        if self is GameType.PLAYOFF:
            return "Playoffs"
        if self is GameType.PRESEASON:
            return "Preseason"
        return "Regular Season"


class GameResult(Enum):
    """Per-game outcome from the point of view of one club or goaltender"""
    WIN = "W"
    LOSS = "L"
    OT_LOSS = "OTL"
    UNKNOWN = "-"


class RecapState(Enum):
    """Terminal states of the highlight video lookup"""
    EMBEDDABLE = "embeddable"
    SEARCH = "search"
    NO_VIDEO = "no_video"


# Game states the schedule feed uses for finished games
COMPLETED_GAME_STATES = ("OFF", "FINAL")

# lastPeriodType values that turn a loss into an overtime loss
OVERTIME_PERIOD_TYPES = ("OT", "SO")
