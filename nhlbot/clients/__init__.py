"""
Remote feed clients for the NHL Bot
"""

from .nhl_client import NHLWebClient, NHLSearchClient
from .espn_client import ESPNInjuriesClient
from .news_client import NewsFeedClient
from .youtube_client import YouTubeSearchClient

__all__ = [
    'NHLWebClient',
    'NHLSearchClient',
    'ESPNInjuriesClient',
    'NewsFeedClient',
    'YouTubeSearchClient',
]
