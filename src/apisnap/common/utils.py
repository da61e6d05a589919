"""
apisnap Common Utilities

Shared helpers for console colors, filenames and header display.
"""

import re
from typing import Dict

# ANSI color codes
ANSI_GREEN = "\033[32m"
ANSI_YELLOW = "\033[33m"
ANSI_RED = "\033[31m"
ANSI_BLUE = "\033[34m"
ANSI_GRAY = "\033[90m"
ANSI_RESET = "\033[0m"

ANSI_ESCAPE_RE = re.compile(r'\x1B\[[0-9;]*m')

# Header names containing these fragments are masked when displayed
SENSITIVE_HEADER_FRAGMENTS = ('auth', 'token')
MASK_VISIBLE_CHARS = 10


def colorize(text: str, color: str) -> str:
    """
    Wrap text in an ANSI color code.

    Args:
        text: Text to color
        color: One of the ANSI_* constants

    Returns:
        Colored text terminated by a reset code
    """
    return f"{color}{text}{ANSI_RESET}"


def red(text: str) -> str:
    return colorize(text, ANSI_RED)


def green(text: str) -> str:
    return colorize(text, ANSI_GREEN)


def yellow(text: str) -> str:
    return colorize(text, ANSI_YELLOW)


def blue(text: str) -> str:
    return colorize(text, ANSI_BLUE)


def gray(text: str) -> str:
    return colorize(text, ANSI_GRAY)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return ANSI_ESCAPE_RE.sub('', text)


def slugify_name(name: str) -> str:
    """
    Turn an endpoint display name into a kebab-case filename stem.

    Lowercases, replaces whitespace runs with hyphens and drops every
    character outside [a-z0-9-].

    Example:
        slugify_name("Clients Detail")  # "clients-detail"
    """
    slug = name.lower()
    slug = re.sub(r'\s+', '-', slug)
    return re.sub(r'[^a-z0-9-]', '', slug)


def mask_header_value(name: str, value: str) -> str:
    """
    Mask credentials before a header is printed to the console.

    Args:
        name: Header name
        value: Header value

    Returns:
        First characters of the value followed by "..." for sensitive
        headers, the value unchanged otherwise
    """
    lowered = name.lower()
    if any(fragment in lowered for fragment in SENSITIVE_HEADER_FRAGMENTS):
        return f"{value[:MASK_VISIBLE_CHARS]}..."
    return value


def describe_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Return a copy of headers safe for display."""
    return {k: mask_header_value(k, str(v)) for k, v in headers.items()}
