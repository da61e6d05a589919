"""
apisnap Client Settings

Environment-derived configuration for the HTTP client. The environment is
read once, here, and the resulting settings object is handed to the client.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

logger = logging.getLogger("apisnap.settings")

DEFAULT_TIMEOUT = 10


@dataclass
class ClientSettings:
    """Connection settings for the API client."""

    access_token: Optional[str] = None
    custom_headers: Dict[str, str] = field(default_factory=dict)
    base_url: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ClientSettings':
        """
        Build settings from environment variables.

        Reads ACCESS_TOKEN, CUSTOM_HEADERS (a JSON object) and API_BASE_URL.
        A CUSTOM_HEADERS value that is not a JSON object is logged and
        ignored.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ClientSettings instance
        """
        env = os.environ if environ is None else environ

        return cls(
            access_token=env.get('ACCESS_TOKEN') or None,
            custom_headers=parse_custom_headers(env.get('CUSTOM_HEADERS')),
            base_url=env.get('API_BASE_URL') or None,
        )

    @property
    def headers(self) -> Dict[str, str]:
        """Request headers: bearer token first, custom headers merged over it."""
        headers = {}
        if self.access_token:
            headers['Authorization'] = f"Bearer {self.access_token}"
        headers.update(self.custom_headers)
        return headers

    def resolve_url(self, url: str) -> str:
        """
        Prefix relative endpoint paths with the base URL.

        Absolute http(s) URLs are returned unchanged.
        """
        if not self.base_url or url.startswith(('http://', 'https://')):
            return url
        return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"


def parse_custom_headers(raw: Optional[str]) -> Dict[str, str]:
    """
    Parse the CUSTOM_HEADERS JSON object.

    Args:
        raw: JSON text, or None

    Returns:
        Header mapping, empty when unset or malformed
    """
    if not raw:
        return {}

    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Failed to parse CUSTOM_HEADERS: {e}")
        return {}

    if not isinstance(parsed, dict):
        logger.warning(f"Ignoring CUSTOM_HEADERS: expected a JSON object, got {type(parsed).__name__}")
        return {}

    return {str(k): str(v) for k, v in parsed.items()}
