"""
apisnap Diff Renderer

Line diff between two captured texts, laid out like jest-diff
(Expected/Received legend, @@ hunks, 3 context lines), with per-side line
numbers, colors and a change summary.
"""

import difflib
import re
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

from ..common.utils import gray, green, red, yellow

CONTEXT_LINES = 3
LINE_NUMBER_WIDTH = 4

LEGEND = ('- Expected', '+ Received')
FALLBACK_MESSAGE = 'Files are different'

HUNK_HEADER_RE = re.compile(r'^@@\s+-(\d+)(?:,\d+)?\s+\+(\d+)(?:,\d+)?\s+@@')


class DiffState(NamedTuple):
    """Accumulator carried across the lines of a diff."""

    before_line: int = 0
    after_line: int = 0
    added_count: int = 0
    removed_count: int = 0
    in_hunk: bool = False


@dataclass
class DiffSummary:
    """Rendered diff plus its change counts."""

    text: str
    added_count: int = 0
    removed_count: int = 0


def split_lines(text: str) -> List[str]:
    """Split on line feeds only. An empty text has no lines, as in jest-diff."""
    if not text:
        return []
    return text.split('\n')


def unified_diff_text(before_text: str, after_text: str, context_lines: int = CONTEXT_LINES) -> str:
    """
    Build the plain (uncolored, unnumbered) diff of two texts.

    Returns an empty string when the texts have the same lines.

    Example output:
        - Expected
        + Received

        @@ -1,3 +1,3 @@
          {
        -   "a": 1
        +   "a": 2
          }
    """
    diff_lines = list(difflib.unified_diff(
        split_lines(before_text),
        split_lines(after_text),
        lineterm='',
        n=context_lines,
    ))
    if not diff_lines:
        return ''

    # Drop the ---/+++ file header, use the jest-style legend instead
    body = []
    for line in diff_lines[2:]:
        if line.startswith('@@'):
            body.append(line)
        else:
            body.append(f"{line[:1]} {line[1:]}")

    return '\n'.join([*LEGEND, '', *body])


def _numbered(number: int, line: str) -> str:
    return f"{str(number).rjust(LINE_NUMBER_WIDTH)} {line}"


def advance(state: DiffState, line: str) -> Tuple[DiffState, str]:
    """
    Consume one diff line.

    Returns:
        The next state and the rendered (colored, numbered) line
    """
    if line == '':
        return state, gray(line)

    header = HUNK_HEADER_RE.match(line)
    if header:
        state = state._replace(
            before_line=int(header.group(1)),
            after_line=int(header.group(2)),
            in_hunk=True,
        )
        return state, gray(line)

    if not state.in_hunk:
        # Legend
        return state, gray(line)

    marker = line[:1]
    if marker == '-':
        rendered = red(_numbered(state.before_line, line))
        return state._replace(
            before_line=state.before_line + 1,
            removed_count=state.removed_count + 1,
        ), rendered
    if marker == '+':
        rendered = green(_numbered(state.after_line, line))
        return state._replace(
            after_line=state.after_line + 1,
            added_count=state.added_count + 1,
        ), rendered

    rendered = gray(_numbered(state.before_line, line))
    return state._replace(
        before_line=state.before_line + 1,
        after_line=state.after_line + 1,
    ), rendered


def number_diff_lines(diff_output: str) -> DiffSummary:
    """
    Add file line numbers, colors and a change summary to a diff.

    Removed lines carry their line number in the "before" text, added lines
    their number in the "after" text, context lines the "before" number.
    Both counters restart at the start values of every @@ header.

    Args:
        diff_output: Output of unified_diff_text()

    Returns:
        DiffSummary; empty text for empty input
    """
    if not diff_output:
        return DiffSummary(text='')

    state = DiffState()
    rendered_lines: List[str] = []
    for line in diff_output.split('\n'):
        state, rendered = advance(state, line)
        rendered_lines.append(rendered)

    summary = (
        f"\n  {yellow('📊 Changes:')} "
        f"{red(f'{state.removed_count} lines removed')} | "
        f"{green(f'{state.added_count} lines added')}\n"
    )

    return DiffSummary(
        text=summary + '\n'.join(rendered_lines),
        added_count=state.added_count,
        removed_count=state.removed_count,
    )


def render_diff(before_text: str, after_text: str, context_lines: int = CONTEXT_LINES) -> Optional[DiffSummary]:
    """
    Compare two texts.

    Args:
        before_text: Expected (before) content
        after_text: Received (after) content
        context_lines: Unchanged lines shown around each change

    Returns:
        None when the texts are byte-for-byte equal, otherwise a
        DiffSummary. Texts that differ only in ways the line diff cannot
        show get a generic message.
    """
    if before_text == after_text:
        return None

    summary = number_diff_lines(unified_diff_text(before_text, after_text, context_lines))
    if not summary.text:
        return DiffSummary(text=FALLBACK_MESSAGE)
    return summary
