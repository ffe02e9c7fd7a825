"""
HTTP client and insights providers
"""

from .errors import ApiError, InvalidURLError, TransportError, ServerError, InsightsError
from .api_client import ApiClient
from .insights import MockInsightsService, RemoteInsightsService

__all__ = [
    'ApiError', 'InvalidURLError', 'TransportError', 'ServerError', 'InsightsError',
    'ApiClient', 'MockInsightsService', 'RemoteInsightsService'
]
