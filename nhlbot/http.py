#!/usr/bin/env python3
"""
HTTP access for the NHL Bot
Thin wrapper around one shared aiohttp.ClientSession with error mapping
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from .exceptions import UpstreamNotFound, UpstreamUnavailable

DEFAULT_TIMEOUT = 15
DEFAULT_USER_AGENT = 'MeshCore-NHL-Bot/1.0'


class HTTPClient:
    """
    Performs GET requests and maps failures onto UpstreamUnavailable / UpstreamNotFound.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None, *,
                 timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT,
                 logger: Optional[logging.Logger] = None):
        self._session = session
        self._owns_session = session is None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = {'User-Agent': user_agent}
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config, logger: Optional[logging.Logger] = None) -> "HTTPClient":
        return cls(
            timeout=config.getfloat('Http', 'timeout', fallback=DEFAULT_TIMEOUT),
            user_agent=config.get('Http', 'user_agent', fallback=DEFAULT_USER_AGENT),
            logger=logger,
        )

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self.headers)
            self._owns_session = True
        return self._session

    async def close(self):
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a URL and decode the JSON body"""
        async def read(response):
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise UpstreamUnavailable(f"Invalid JSON from {url}", status_code=response.status, url=url) from e

        return await self._get(url, params, read)

    async def get_text(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        """GET a URL and return the body as text (RSS feeds)"""
        async def read(response):
            return await response.text()

        return await self._get(url, params, read)

    async def _get(self, url, params, read):
        self.logger.debug(f"GET {url} params={params}")
        try:
            async with self.session.get(url, params=params, headers=self.headers,
                                        timeout=self.timeout) as response:
                self._raise_for_status(response, url)
                return await read(response)
        except asyncio.TimeoutError as e:
            raise UpstreamUnavailable(f"Timed out fetching {url}", url=url) from e
        except aiohttp.ClientError as e:
            raise UpstreamUnavailable(f"Error fetching {url}: {e}", url=url) from e

    @staticmethod
    def _raise_for_status(response, url: str):
        status = response.status
        if 200 <= status < 300:
            return
        message = f"Request to {url} failed with status {status}"
        if status == 404:
            raise UpstreamNotFound(message, status_code=status, url=url)
        raise UpstreamUnavailable(message, status_code=status, url=url)
