"""
Networking and insights errors
"""

from typing import Optional


class ApiError(Exception):
    """Base class for API client failures"""


class InvalidURLError(ApiError):
    """No usable base URL is configured"""


class TransportError(ApiError):
    """The request never got a response"""


class ServerError(ApiError):
    """The server answered with a non-2xx status"""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"Server returned status {status_code}")


class InsightsError(Exception):
    """Insights could not be produced"""
