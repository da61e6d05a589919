"""
apisnap Response Capturer

Fetches every configured endpoint, normalizes the body and writes one JSON
file per endpoint into a capture directory (before/ or after/).
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .endpoints import Endpoint
from .fetcher import ApiClient, FetchError
from .normalizer import normalize_response

logger = logging.getLogger("apisnap.capture")

CAPTURE_EXTENSION = '.json'


@dataclass
class CaptureSummary:
    """Results from a capture run."""

    success_count: int = 0
    error_count: int = 0
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.success_count + self.error_count

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'success_count': self.success_count,
            'error_count': self.error_count,
            'total': self.total,
            'errors': dict(self.errors),
        }


def serialize_capture(data: Any) -> str:
    """Render a captured value the way it is stored on disk."""
    return json.dumps(data, indent=2, ensure_ascii=False) + '\n'


class ResponseCapturer:
    """
    Capture normalized API responses to a directory.

    Endpoints are fetched one at a time. A failing endpoint is logged and
    counted, and the run continues with the next one.

    Example:
        capturer = ResponseCapturer(client, 'before')
        summary = capturer.capture_all(config.endpoints)
        print(f"{summary.success_count} captured, {summary.error_count} errors")
    """

    def __init__(self, client: ApiClient, output_dir: str):
        """
        Initialize capturer.

        Args:
            client: API client used for fetching
            output_dir: Directory receiving the JSON files
        """
        self.client = client
        self.output_dir = Path(output_dir)

    def capture_one(self, endpoint: Endpoint) -> Path:
        """
        Fetch, normalize and save a single endpoint.

        Any HTTP status is accepted; only transport and decoding failures
        raise.

        Returns:
            Path of the written file

        Raises:
            FetchError: If the request fails
        """
        response = self.client.fetch(endpoint.url, endpoint.method, allow_error_status=True)
        normalized = normalize_response(response.data)

        file_path = self.output_dir / endpoint.capture_filename(CAPTURE_EXTENSION)
        file_path.write_text(serialize_capture(normalized), encoding='utf-8')

        logger.debug(f"Saved {endpoint.name} ({response.status}) to {file_path}")
        return file_path

    def capture_all(self, endpoints: List[Endpoint], verbose: bool = True) -> CaptureSummary:
        """
        Capture every endpoint in order.

        Args:
            endpoints: Endpoints to fetch
            verbose: Print per-endpoint progress

        Returns:
            CaptureSummary with success and error counts
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        summary = CaptureSummary()

        if verbose:
            print(f"\n📸 Capturing API responses to {self.output_dir}/\n")

        for endpoint in endpoints:
            if verbose:
                print(f"    URL: {endpoint.url}")

            try:
                file_path = self.capture_one(endpoint)
            except FetchError as e:
                logger.error(f"Failed to fetch {e.url}: {e.message}")
                summary.error_count += 1
                summary.errors[endpoint.name] = e.message
                if verbose:
                    print(f"    ❌ Error: {e.message}\n")
                continue

            summary.success_count += 1
            if verbose:
                print(f"    ✅ Saved to {file_path.name}\n")

        if verbose:
            print(f"📊 Summary: {summary.success_count} captured, {summary.error_count} errors\n")

        return summary
