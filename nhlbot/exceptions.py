#!/usr/bin/env python3
"""
Custom exceptions for the NHL Bot
Raised by the HTTP layer and feed clients
"""


class NHLBotError(RuntimeError):
    """Base class for bot errors"""


class UpstreamUnavailable(NHLBotError):
    """
    A remote feed call failed (connection error, timeout, bad status or payload).
    """

    def __init__(self, message: str, *, status_code: int = None, url: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UpstreamNotFound(UpstreamUnavailable):
    """
    The remote feed answered 404 for the requested resource.
    """
