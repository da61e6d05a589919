"""
apisnap Compare Module

Before/after comparison of captured responses with a numbered, colored
line diff.
"""

from .differ import DiffState, DiffSummary, number_diff_lines, render_diff, unified_diff_text
from .comparator import (
    ComparisonReport,
    ComparisonResult,
    ComparisonSetupError,
    ResponseComparator,
    compare_all,
    compare_texts,
    read_capture,
)

__all__ = [
    'DiffState',
    'DiffSummary',
    'number_diff_lines',
    'render_diff',
    'unified_diff_text',
    'ComparisonReport',
    'ComparisonResult',
    'ComparisonSetupError',
    'ResponseComparator',
    'compare_all',
    'compare_texts',
    'read_capture',
]
