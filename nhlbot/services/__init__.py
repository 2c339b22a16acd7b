"""
Result assembly services for the NHL Bot
"""

from .team_service import TeamService
from .player_service import PlayerService
from .feeds import InjuryService, NewsService, parse_rss, clean_html
from .recap import RecapFinder, extract_three_stars, normalize_star

__all__ = [
    'TeamService',
    'PlayerService',
    'InjuryService',
    'NewsService',
    'RecapFinder',
    'parse_rss',
    'clean_html',
    'extract_three_stars',
    'normalize_star',
]
