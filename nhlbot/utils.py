#!/usr/bin/env python3
"""
Utility functions for the NHL Bot
Text shaping for short mesh messages and local time formatting
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

import pytz

logger = logging.getLogger(__name__)


def get_timezone(config) -> Optional[pytz.BaseTzInfo]:
    """Configured display timezone ([Bot] timezone), or None for the system timezone"""
    timezone_str = config.get('Bot', 'timezone', fallback='') if config is not None else ''
    if not timezone_str:
        return None
    try:
        return pytz.timezone(timezone_str)
    except pytz.exceptions.UnknownTimeZoneError:
        logger.warning(f"Invalid timezone '{timezone_str}', using system timezone")
        return None


def to_local(dt: datetime, tz=None) -> datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz) if tz else dt.astimezone()


def format_clean_date(dt: datetime) -> str:
    """'Oct 5' style date without leading zeros"""
    return f"{dt.strftime('%b')} {dt.day}"


def format_clean_time(dt: datetime) -> str:
    """'7:00 PM' style time without leading zeros"""
    hour_12 = dt.hour % 12 or 12
    return f"{hour_12}:{dt.minute:02d} {dt.strftime('%p')}"


def format_long_date(dt: datetime) -> str:
    """'Saturday, October 5, 2024'"""
    return f"{dt.strftime('%A')}, {dt.strftime('%B')} {dt.day}, {dt.year}"


def format_countdown(target: datetime, now: Optional[datetime] = None) -> str:
    """Time left until target as '2d 3h 15m'"""
    now = now or datetime.now(timezone.utc)
    remaining = (target - now).total_seconds()
    if remaining <= 0:
        return "Game time!"

    days = int(remaining // 86400)
    hours = int((remaining % 86400) // 3600)
    minutes = int((remaining % 3600) // 60)

    result = ''
    if days > 0:
        result += f"{days}d "
    if hours > 0 or days > 0:
        result += f"{hours}h "
    result += f"{minutes}m"
    return result


def signed(value: int) -> str:
    return f"+{value}" if value >= 0 else str(value)


def truncate_string(text: str, max_length: int, ellipsis: str = '...') -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - len(ellipsis)] + ellipsis


def split_message(response: str, max_length: int = 130) -> List[str]:
    """Split a multi-line reply into transport-sized chunks.

    Lines are never split; a continued chunk ends with '...' and the next
    one starts with '...'. A single line longer than max_length is truncated.
    """
    if len(response) <= max_length:
        return [response]

    chunks = []
    current = ''
    for line in response.split('\n'):
        line = truncate_string(line, max_length - 8)
        if current and len(current) + len(line) + 1 > max_length - 4:
            chunks.append(current + "\n...")
            current = f"...\n{line}"
        elif current:
            current += f"\n{line}"
        else:
            current = line

    if current:
        chunks.append(current)
    return chunks


def calculate_age(birth_date: Optional[str], today: Optional[date] = None) -> Optional[int]:
    """Age in whole years from a 'YYYY-MM-DD' birth date"""
    if not birth_date:
        return None
    try:
        born = date.fromisoformat(birth_date[:10])
    except ValueError:
        return None
    today = today or date.today()
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))
