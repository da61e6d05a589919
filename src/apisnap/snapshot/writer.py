"""
apisnap Snapshot Writer

Writes one Jest snapshot file per endpoint into responses/, and verifies
live responses against the stored snapshots.
"""

import logging
from pathlib import Path
from typing import List

from ..capture.capturer import CaptureSummary
from ..capture.endpoints import DEFAULT_SUITE_NAME, Endpoint
from ..capture.fetcher import ApiClient, FetchError
from ..capture.normalizer import normalize_response
from ..compare.comparator import (
    STATUS_MISSING,
    ComparisonReport,
    ComparisonResult,
    compare_texts,
    print_result,
    read_capture,
)
from .formatter import build_test_name, format_snapshot

logger = logging.getLogger("apisnap.snapshot")

SNAPSHOT_EXTENSION = '.snap'
DEFAULT_SNAPSHOT_DIR = 'responses'


class SnapshotWriter:
    """
    Capture endpoints as Jest snapshot files.

    Example:
        writer = SnapshotWriter(client, suite=config.suite)
        summary = writer.write_all(config.endpoints)
        report = writer.verify_all(config.endpoints)
    """

    def __init__(
        self,
        client: ApiClient,
        output_dir: str = DEFAULT_SNAPSHOT_DIR,
        suite: str = DEFAULT_SUITE_NAME,
        normalize: bool = True
    ):
        """
        Initialize snapshot writer.

        Args:
            client: API client used for fetching
            output_dir: Directory receiving the .snap files
            suite: Test suite name used in snapshot keys
            normalize: Mask volatile fields before formatting
        """
        self.client = client
        self.output_dir = Path(output_dir)
        self.suite = suite
        self.normalize = normalize

    def snapshot_path(self, endpoint: Endpoint) -> Path:
        return self.output_dir / endpoint.snapshot_filename(SNAPSHOT_EXTENSION)

    def render(self, endpoint: Endpoint) -> str:
        """
        Fetch an endpoint and render its snapshot file content.

        Raises:
            FetchError: If the request fails or returns an error status
        """
        response = self.client.fetch(endpoint.url, endpoint.method)
        data = normalize_response(response.data) if self.normalize else response.data
        return format_snapshot(data, endpoint.matchers, build_test_name(self.suite, endpoint.name))

    def write_all(self, endpoints: List[Endpoint], verbose: bool = True) -> CaptureSummary:
        """
        Write a snapshot file for every endpoint.

        Returns:
            CaptureSummary with success and error counts
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        summary = CaptureSummary()

        if verbose:
            print("📸 Capturing API responses and generating snapshots...\n")

        for endpoint in endpoints:
            if verbose:
                print(f"   Fetching: {endpoint.name}")
                print(f"   URL: {endpoint.url}")

            try:
                content = self.render(endpoint)
            except FetchError as e:
                logger.error(f"Failed to fetch {e.url}: {e.message}")
                summary.error_count += 1
                summary.errors[endpoint.name] = e.message
                if verbose:
                    print(f"   ❌ Error: {e.message}\n")
                continue

            path = self.snapshot_path(endpoint)
            path.write_text(content, encoding='utf-8')
            summary.success_count += 1

            if verbose:
                print(f"   ✅ Saved → {self.output_dir.name}/{path.name}\n")

        if verbose:
            print("\n📊 Summary:")
            print(f"   ✅ Captured: {summary.success_count}")
            print(f"   ❌ Errors: {summary.error_count}")
            print(f"\n💾 Snapshots saved to: {self.output_dir.name}/\n")

        return summary

    def verify_all(self, endpoints: List[Endpoint], verbose: bool = True) -> ComparisonReport:
        """
        Compare live responses with the stored snapshots.

        A snapshot file that doesn't exist yet is reported as missing; an
        endpoint that cannot be fetched is recorded in report.errors.

        Returns:
            ComparisonReport, one result per fetched endpoint
        """
        report = ComparisonReport()

        for endpoint in endpoints:
            path = self.snapshot_path(endpoint)

            try:
                received = self.render(endpoint)
            except FetchError as e:
                logger.error(f"Failed to fetch {e.url}: {e.message}")
                report.errors[endpoint.name] = e.message
                if verbose:
                    print(f"❌ {endpoint.name}: {e.message}")
                continue

            if not path.exists():
                result = ComparisonResult(
                    filename=path.name,
                    status=STATUS_MISSING,
                    diff='Snapshot file not found',
                )
            else:
                expected = read_capture(path)
                result = compare_texts(path.name, expected, received)

            report.results.append(result)
            if verbose:
                print_result(result)

        return report
