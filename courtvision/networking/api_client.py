"""
Minimal JSON API client
"""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import InvalidURLError, TransportError, ServerError


class ApiClient:
    """Thin wrapper around requests for the backend API"""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        """
        Initialize API client

        Args:
            base_url: Root URL of the backend, e.g. https://api.example.com/v1
            timeout: Per-request timeout in seconds
            session: Optional requests session (shared connection pool)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    def build_url(self, path: str) -> str:
        if not self.base_url or not self.base_url.startswith(("http://", "https://")):
            raise InvalidURLError(f"Invalid base URL: {self.base_url!r}")
        return self.base_url.rstrip('/') + '/' + path.lstrip('/')

    def request(self, path: str, method: str = "GET",
                payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and return the decoded body

        Returns:
            Parsed JSON when the response is JSON, otherwise the raw text
        """
        url = self.build_url(path)

        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise ServerError(response.status_code)

        if 'application/json' in response.headers.get('Content-Type', ''):
            try:
                return response.json()
            except ValueError as e:
                self.logger.warning(f"{method} {url} returned invalid JSON: {e}")
                raise TransportError(f"Invalid JSON response: {e}") from e
        return response.text

    def get(self, path: str) -> Any:
        return self.request(path)

    def post(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request(path, method="POST", payload=payload)
