"""
Tests for the diff renderer.

Tests the jest-style unified diff, per-side line numbering across hunks,
change counting and the identical / fallback cases.
"""

import re
from unittest.mock import patch

import pytest

from apisnap.common.utils import ANSI_GREEN, ANSI_RED, gray, strip_ansi
from apisnap.compare.differ import (
    FALLBACK_MESSAGE,
    DiffState,
    advance,
    number_diff_lines,
    render_diff,
    unified_diff_text,
)

NUMBERED_LINE_RE = re.compile(r'^\s*(\d+) ([-+ ]) (.*)$')


def numbered_lines(text):
    """Parse rendered output into (number, marker, content) tuples."""
    parsed = []
    for line in strip_ansi(text).split('\n'):
        match = NUMBERED_LINE_RE.match(line)
        if match:
            parsed.append((int(match.group(1)), match.group(2), match.group(3)))
    return parsed


@pytest.fixture
def two_hunk_texts():
    """20 lines with changes at lines 3 and 18, far enough apart for two hunks."""
    before = [f"line {i}" for i in range(1, 21)]
    after = list(before)
    after[2] = 'changed 3'
    after[17] = 'changed 18'
    return '\n'.join(before), '\n'.join(after)


class TestIdentical:
    """Equal texts produce no diff."""

    @pytest.mark.parametrize('text', ['', 'x', '{\n  "a": 1\n}\n'])
    def test_identical(self, text):
        assert render_diff(text, text) is None


class TestUnifiedDiffText:
    """Test the plain jest-style diff."""

    def test_layout(self):
        text = unified_diff_text('{"a":1}', '{"a":2}')

        assert text.split('\n') == [
            '- Expected',
            '+ Received',
            '',
            '@@ -1 +1 @@',
            '- {"a":1}',
            '+ {"a":2}',
        ]

    def test_context_lines_prefixed_with_two_spaces(self):
        text = unified_diff_text('a\nb\nc\n', 'a\nx\nc\n')

        assert '  a' in text.split('\n')
        assert '  c' in text.split('\n')

    def test_same_lines_give_empty_text(self):
        assert unified_diff_text('a\nb\n', 'a\nb\n') == ''

    def test_splits_on_line_feed_only(self):
        text = unified_diff_text('a\u2028b\nc', 'a\u2028b\nd')

        assert '@@ -1,2 +1,2 @@' in text.split('\n')
        assert '  a\u2028b' in text.split('\n')

    def test_context_window(self, two_hunk_texts):
        before, after = two_hunk_texts

        headers = [l for l in unified_diff_text(before, after).split('\n') if l.startswith('@@')]

        assert headers == ['@@ -1,6 +1,6 @@', '@@ -15,6 +15,6 @@']


class TestRenderDiff:
    """Test rendered diffs and counts."""

    def test_single_value_change(self):
        summary = render_diff('{"a":1}', '{"a":2}')

        assert summary.removed_count == 1
        assert summary.added_count == 1
        plain = strip_ansi(summary.text)
        assert '1 lines removed' in plain
        assert '1 lines added' in plain
        assert '   1 - {"a":1}' in plain
        assert '   1 + {"a":2}' in plain

    def test_summary_is_first_line(self):
        summary = render_diff('a', 'b')

        first = strip_ansi(summary.text).strip().split('\n')[0]
        assert first.startswith('📊 Changes:')

    def test_colors(self):
        summary = render_diff('a', 'b')

        assert f"{ANSI_RED}   1 - a" in summary.text
        assert f"{ANSI_GREEN}   1 + b" in summary.text

    def test_trailing_newline_difference(self):
        summary = render_diff('a\n', 'a')

        assert summary.removed_count == 1
        assert summary.added_count == 0
        assert (2, '-', '') in numbered_lines(summary.text)

    @patch('apisnap.compare.differ.unified_diff_text', return_value='')
    def test_fallback_when_no_hunks(self, _mock_diff):
        summary = render_diff('a\n', 'a')

        assert summary.text == FALLBACK_MESSAGE
        assert summary.added_count == 0
        assert summary.removed_count == 0

    def test_empty_before(self):
        summary = render_diff('', 'x')

        assert summary.added_count == 1
        assert summary.removed_count == 0
        assert (1, '+', 'x') in numbered_lines(summary.text)

    def test_independent_counters_on_insert(self):
        summary = render_diff('a\nb\nc', 'a\nx\nb\nc')

        assert numbered_lines(summary.text) == [
            (1, ' ', 'a'),
            (2, '+', 'x'),
            (2, ' ', 'b'),
            (3, ' ', 'c'),
        ]

    def test_line_numbers_follow_file_lines(self, two_hunk_texts):
        before, after = two_hunk_texts

        summary = render_diff(before, after)
        lines = numbered_lines(summary.text)

        assert summary.removed_count == 2
        assert summary.added_count == 2
        for number, _marker, content in lines:
            assert int(content.split()[-1]) == number

    def test_counters_reset_at_each_hunk(self, two_hunk_texts):
        before, after = two_hunk_texts

        lines = numbered_lines(render_diff(before, after).text)
        numbers = [n for n, marker, _ in lines if marker != '+']

        assert numbers == [1, 2, 3, 4, 5, 6, 15, 16, 17, 18, 19, 20]

    def test_context_line_starting_with_dash(self):
        """Context content is classified by its marker, not its text."""
        summary = render_diff('-x\na\n', '-x\nb\n')

        assert summary.removed_count == 1
        assert summary.added_count == 1
        assert (1, ' ', '-x') in numbered_lines(summary.text)

    def test_unicode_line_separator_inside_value(self):
        """Only line feeds end a line, so numbers match the file's lines."""
        before = '{\n  "s": "x\u2028y",\n  "a": 1\n}\n'
        after = '{\n  "s": "x\u2028y",\n  "a": 2\n}\n'

        lines = numbered_lines(render_diff(before, after).text)

        assert (2, ' ', '  "s": "x\u2028y",') in lines
        assert (3, '-', '  "a": 1') in lines
        assert (3, '+', '  "a": 2') in lines
        assert (4, ' ', '}') in lines

    def test_line_endings_are_significant(self):
        summary = render_diff('a\r\nb\r\n', 'a\nb\n')

        assert summary.removed_count == 2
        assert summary.added_count == 2


class TestNumberDiffLines:
    """Test the numbering fold directly."""

    def test_empty_input(self):
        summary = number_diff_lines('')

        assert summary.text == ''
        assert summary.added_count == 0

    def test_hunk_header_resets_state(self):
        state = DiffState(before_line=9, after_line=9, added_count=2, removed_count=1, in_hunk=True)

        new_state, _ = advance(state, '@@ -4,2 +7,3 @@')

        assert new_state.before_line == 4
        assert new_state.after_line == 7
        assert new_state.added_count == 2
        assert new_state.removed_count == 1

    def test_legend_not_numbered(self):
        state, rendered = advance(DiffState(), '- Expected')

        assert state == DiffState()
        assert strip_ansi(rendered) == '- Expected'

    def test_blank_line_gray_and_unnumbered(self):
        state, rendered = advance(DiffState(in_hunk=True), '')

        assert rendered == gray('')
        assert strip_ansi(rendered) == ''
        assert state == DiffState(in_hunk=True)

    def test_removed_line_advances_before_only(self):
        state, rendered = advance(DiffState(before_line=5, after_line=8, in_hunk=True), '- old')

        assert state.before_line == 6
        assert state.after_line == 8
        assert state.removed_count == 1
        assert strip_ansi(rendered) == '   5 - old'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
