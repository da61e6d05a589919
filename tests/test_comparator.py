"""
Tests for the before/after comparison driver.

Tests file pairing, identical/different/missing classification, fatal
setup errors and exit codes.
"""

import pytest

from apisnap.common.utils import strip_ansi
from apisnap.compare.comparator import (
    STATUS_DIFFERENT,
    STATUS_IDENTICAL,
    STATUS_MISSING,
    ComparisonReport,
    ComparisonResult,
    ComparisonSetupError,
    ResponseComparator,
    compare_all,
    read_capture,
)


@pytest.fixture
def capture_dirs(tmp_path):
    """Empty before/ and after/ directories."""
    before = tmp_path / 'before'
    after = tmp_path / 'after'
    before.mkdir()
    after.mkdir()
    return before, after


class TestComparisonReport:
    """Test report counters and exit codes."""

    def test_counts(self):
        report = ComparisonReport(results=[
            ComparisonResult('a.json', STATUS_IDENTICAL),
            ComparisonResult('b.json', STATUS_DIFFERENT),
            ComparisonResult('c.json', STATUS_MISSING),
            ComparisonResult('d.json', STATUS_IDENTICAL),
        ])

        assert report.identical_count == 2
        assert report.different_count == 1
        assert report.missing_count == 1
        assert report.total == 4
        assert report.exit_code == 1

    def test_all_identical_exit_zero(self):
        report = ComparisonReport(results=[ComparisonResult('a.json', STATUS_IDENTICAL)])

        assert report.exit_code == 0

    def test_errors_fail(self):
        report = ComparisonReport(
            results=[ComparisonResult('a.json', STATUS_IDENTICAL)],
            errors={'Health': 'timeout'},
        )

        assert report.exit_code == 1

    def test_result_to_dict(self):
        data = ComparisonResult('a.json', STATUS_DIFFERENT, diff='x', added_count=1).to_dict()

        assert data['filename'] == 'a.json'
        assert data['status'] == 'different'
        assert data['added_count'] == 1


class TestResponseComparator:
    """Test ResponseComparator classification."""

    def test_identical(self, capture_dirs):
        before, after = capture_dirs
        (before / 'foo.json').write_text('{"a":1}')
        (after / 'foo.json').write_text('{"a":1}')

        result = ResponseComparator(before, after).compare_file('foo.json')

        assert result.status == STATUS_IDENTICAL
        assert result.diff is None

    def test_different(self, capture_dirs):
        before, after = capture_dirs
        (before / 'foo.json').write_text('{"a":1}')
        (after / 'foo.json').write_text('{"a":2}')

        result = ResponseComparator(before, after).compare_file('foo.json')

        assert result.status == STATUS_DIFFERENT
        assert result.removed_count == 1
        assert result.added_count == 1
        assert '1 lines removed' in strip_ansi(result.diff)

    def test_line_endings_differ(self, capture_dirs):
        before, after = capture_dirs
        (before / 'a.json').write_bytes(b'{\r\n  "a": 1\r\n}\r\n')
        (after / 'a.json').write_bytes(b'{\n  "a": 1\n}\n')

        result = ResponseComparator(before, after).compare_file('a.json')

        assert result.status == STATUS_DIFFERENT
        assert result.removed_count == 3
        assert result.added_count == 3

    def test_invalid_utf8_is_replaced(self, capture_dirs):
        before, after = capture_dirs
        (before / 'a.json').write_bytes(b'{"a": "\xff"}')
        (after / 'a.json').write_bytes(b'{"a": "\xff"}')
        (before / 'b.json').write_bytes(b'{"a": "\xff"}')
        (after / 'b.json').write_bytes(b'{"a": "x"}')

        report = ResponseComparator(before, after).compare_all(verbose=False)

        assert [r.status for r in report.results] == [STATUS_IDENTICAL, STATUS_DIFFERENT]
        assert '�' in strip_ansi(report.results[1].diff)

    def test_read_capture_keeps_carriage_returns(self, tmp_path):
        path = tmp_path / 'a.json'
        path.write_bytes(b'1\r\n')

        assert read_capture(path) == '1\r\n'

    def test_missing_after(self, capture_dirs):
        before, after = capture_dirs
        (before / 'bar.json').write_text('{}')

        result = ResponseComparator(before, after).compare_file('bar.json')

        assert result.status == STATUS_MISSING
        assert result.diff == 'After file not found'

    def test_missing_before(self, capture_dirs):
        before, after = capture_dirs

        result = ResponseComparator(before, after).compare_file('ghost.json')

        assert result.status == STATUS_MISSING
        assert result.diff == 'Before file not found'

    def test_list_files_filters_extension(self, capture_dirs):
        before, after = capture_dirs
        (before / 'b.json').write_text('{}')
        (before / 'a.json').write_text('{}')
        (before / 'notes.txt').write_text('ignored')

        assert ResponseComparator(before, after).list_files() == ['a.json', 'b.json']

    def test_missing_before_dir(self, tmp_path):
        (tmp_path / 'after').mkdir()

        with pytest.raises(ComparisonSetupError) as exc_info:
            ResponseComparator(tmp_path / 'before', tmp_path / 'after').list_files()

        assert 'before/' in exc_info.value.message
        assert exc_info.value.hint

    def test_missing_after_dir(self, tmp_path):
        (tmp_path / 'before').mkdir()
        (tmp_path / 'before' / 'foo.json').write_text('{}')

        with pytest.raises(ComparisonSetupError) as exc_info:
            ResponseComparator(tmp_path / 'before', tmp_path / 'after').list_files()

        assert 'after/' in exc_info.value.message

    def test_empty_before_dir(self, capture_dirs):
        before, after = capture_dirs

        with pytest.raises(ComparisonSetupError):
            ResponseComparator(before, after).list_files()

    def test_compare_all_quiet(self, capture_dirs, capsys):
        before, after = capture_dirs
        (before / 'a.json').write_text('1')
        (after / 'a.json').write_text('1')

        report = ResponseComparator(before, after).compare_all(verbose=False)

        assert report.identical_count == 1
        assert capsys.readouterr().out == ''


class TestCompareAll:
    """End-to-end comparison runs."""

    def test_changed_file(self, capture_dirs, capsys):
        before, after = capture_dirs
        (before / 'foo.json').write_text('{"a":1}')
        (after / 'foo.json').write_text('{"a":2}')

        exit_code = compare_all(before, after)

        output = strip_ansi(capsys.readouterr().out)
        assert exit_code == 1
        assert 'foo.json: CHANGED' in output
        assert '1 lines removed | 1 lines added' in output
        assert 'API responses have changed!' in output

    def test_missing_file(self, capture_dirs, capsys):
        before, after = capture_dirs
        (before / 'bar.json').write_text('{}')

        exit_code = compare_all(before, after)

        output = strip_ansi(capsys.readouterr().out)
        assert exit_code == 1
        assert 'bar.json: MISSING' in output
        assert 'Some files are missing!' in output

    def test_all_identical(self, capture_dirs, capsys):
        before, after = capture_dirs
        for name in ('a.json', 'b.json'):
            (before / name).write_text('{\n  "x": 1\n}\n')
            (after / name).write_text('{\n  "x": 1\n}\n')

        exit_code = compare_all(before, after)

        output = strip_ansi(capsys.readouterr().out)
        assert exit_code == 0
        assert 'Changed:   0 files' in output
        assert 'All API responses are identical!' in output

    def test_missing_directory_is_fatal(self, tmp_path, capsys):
        exit_code = compare_all(tmp_path / 'before', tmp_path / 'after')

        output = strip_ansi(capsys.readouterr().out)
        assert exit_code == 1
        assert 'before/ directory not found' in output
        assert 'Comparison Summary' not in output

    def test_empty_before_is_fatal(self, capture_dirs, capsys):
        before, after = capture_dirs

        assert compare_all(before, after) == 1
        assert 'No files in before/' in strip_ansi(capsys.readouterr().out)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
