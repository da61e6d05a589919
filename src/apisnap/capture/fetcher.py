"""
apisnap API Client

Thin JSON-over-HTTP wrapper around a requests session. One attempt per
request, no retries.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..common.settings import ClientSettings

logger = logging.getLogger("apisnap.fetcher")


class FetchError(Exception):
    """A request failed: transport error, error status or non-JSON body."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url
        self.message = message


@dataclass
class FetchedResponse:
    """Decoded response of a single request."""

    url: str
    status: int
    data: Any


class ApiClient:
    """
    Fetch JSON from the configured API.

    Example:
        client = ApiClient(ClientSettings.from_env())
        response = client.fetch('/health')
        print(response.status, response.data)
    """

    def __init__(self, settings: ClientSettings, session: Optional[requests.Session] = None):
        """
        Initialize API client.

        Args:
            settings: Connection settings (headers, base URL, timeout)
            session: Optional pre-built session
        """
        self.settings = settings
        self.session = session or requests.Session()

    def fetch(self, url: str, method: str = 'GET', allow_error_status: bool = False) -> FetchedResponse:
        """
        Send one request and decode the JSON body.

        Args:
            url: Absolute URL or path relative to the base URL
            method: HTTP method
            allow_error_status: Keep 4xx/5xx responses instead of failing

        Returns:
            FetchedResponse with the decoded body (None for an empty body)

        Raises:
            FetchError: On timeout, connection failure, error status when
                        not allowed, or a body that is not JSON
        """
        full_url = self.settings.resolve_url(url)
        logger.debug(f"{method} {full_url}")

        try:
            response = self.session.request(
                method=method,
                url=full_url,
                headers=self.settings.headers,
                timeout=self.settings.timeout,
            )
            if not allow_error_status:
                response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(full_url, str(e)) from e

        if not response.content:
            return FetchedResponse(url=full_url, status=response.status_code, data=None)

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(full_url, f"Response is not valid JSON: {e}") from e

        return FetchedResponse(url=full_url, status=response.status_code, data=data)

    def close(self):
        """Close the underlying session."""
        self.session.close()
