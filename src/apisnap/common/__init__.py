"""
apisnap Common Utilities

Shared settings and helpers used across apisnap modules.
"""

from .utils import colorize, strip_ansi, slugify_name, mask_header_value, describe_headers
from .settings import ClientSettings, parse_custom_headers

__all__ = [
    'colorize',
    'strip_ansi',
    'slugify_name',
    'mask_header_value',
    'describe_headers',
    'ClientSettings',
    'parse_custom_headers',
]
