"""
apisnap Snapshot Module

Jest-compatible snapshot files for captured API responses.
"""

from .formatter import (
    apply_matchers,
    build_test_name,
    format_snapshot,
    format_snapshot_body,
    pretty_format,
)
from .writer import SnapshotWriter

__all__ = [
    'apply_matchers',
    'build_test_name',
    'format_snapshot',
    'format_snapshot_body',
    'pretty_format',
    'SnapshotWriter',
]
