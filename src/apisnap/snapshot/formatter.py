"""
apisnap Snapshot Formatter

Serializes captured values into Jest snapshot files. Values are printed the
way pretty-format prints them with indent 2, printBasicPrototype off and
escapeString off, so the files can be read by Jest's snapshot matchers.
"""

import math
import re
from typing import Any, Dict, Optional

SNAPSHOT_HEADER = '// Jest Snapshot v1, https://goo.gl/fbAQLP'
INDENT = '  '

PLACEHOLDER_RE = re.compile(r'"Any<(String|Number|Date|Boolean|Array|Object)>"')
TEMPLATE_SPECIAL_RE = re.compile(r'`|\\|\$\{')


def build_test_name(suite: str, endpoint_name: str) -> str:
    """Full Jest test name the snapshot is keyed by."""
    return f"{suite} {endpoint_name} API should match snapshot 1"


def apply_matchers(value: Any, matchers: Optional[Dict[str, str]] = None) -> Any:
    """
    Shallow-copy a value and swap matcher fields for Any<Type> placeholders.

    Only keys present on the value are replaced. For lists a key that is
    the decimal string of a valid index addresses that element. Scalars are
    returned as they are.

    Example:
        apply_matchers({"id": 7, "name": "x"}, {"id": "Number"})
        # {"id": "Any<Number>", "name": "x"}
    """
    if isinstance(value, dict):
        clone = dict(value)
        for key, type_tag in (matchers or {}).items():
            if key in clone:
                clone[key] = f"Any<{type_tag}>"
        return clone

    if isinstance(value, list):
        clone = list(value)
        for key, type_tag in (matchers or {}).items():
            if re.fullmatch(r'[0-9]+', key) and int(key) < len(clone):
                clone[int(key)] = f"Any<{type_tag}>"
        return clone

    return value


def _format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0 and math.copysign(1.0, value) < 0:
        return '-0'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def pretty_format(value: Any, indentation: str = '') -> str:
    """
    Print a JSON value in pretty-format style.

    Dict keys are sorted, every container item ends with a comma, strings
    are double-quoted without escaping.

    Args:
        value: JSON-compatible value
        indentation: Current indentation (used for recursion)

    Returns:
        Formatted text
    """
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_number(value)
    if isinstance(value, str):
        return f'"{value}"'

    inner = indentation + INDENT

    if isinstance(value, (list, tuple)):
        if not value:
            return '[]'
        items = ''.join(f"{inner}{pretty_format(item, inner)},\n" for item in value)
        return f"[\n{items}{indentation}]"

    if isinstance(value, dict):
        if not value:
            return '{}'
        items = ''.join(
            f'{inner}"{key}": {pretty_format(value[key], inner)},\n'
            for key in sorted(value, key=str)
        )
        return f"{{\n{items}{indentation}}}"

    raise TypeError(f"Unsupported JSON value type: {type(value).__name__}")


def _escape_template(text: str) -> str:
    return TEMPLATE_SPECIAL_RE.sub(lambda m: '\\' + m.group(0), text)


def format_snapshot_body(value: Any, matchers: Optional[Dict[str, str]] = None) -> str:
    """
    Format a value as the template literal of a snapshot entry.

    Simple values (None, empty string, empty list, anything that prints on
    one line) stay on one line; everything else is wrapped in newlines.

    Returns:
        Text including the surrounding backticks
    """
    annotated = apply_matchers(value, matchers)
    formatted = PLACEHOLDER_RE.sub(r'Any<\1>', pretty_format(annotated))
    formatted = _escape_template(formatted)

    is_simple = (
        annotated is None
        or annotated == ''
        or annotated == []
        or '\n' not in formatted
    )
    if is_simple:
        return f"`{formatted}`"
    return f"`\n{formatted}\n`"


def format_snapshot(value: Any, matchers: Optional[Dict[str, str]], test_name: str) -> str:
    """
    Produce the full content of a snapshot file.

    Args:
        value: Captured value
        matchers: Field name -> type tag (String, Number, Date, Boolean,
                  Array, Object)
        test_name: Full test name, see build_test_name()

    Returns:
        Snapshot file text ending with a newline

    Example:
        format_snapshot({"a": 1}, None, "Suite Health API should match snapshot 1")
        # // Jest Snapshot v1, https://goo.gl/fbAQLP
        #
        # exports[`Suite Health API should match snapshot 1`] = `
        # {
        #   "a": 1,
        # }
        # `;
    """
    body = format_snapshot_body(value, matchers)
    return f"{SNAPSHOT_HEADER}\n\nexports[`{test_name}`] = {body};\n"
