"""
apisnap Response Comparator

Pairs the files of two capture directories, classifies each pair as
identical, different or missing, and reports the result.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..common.utils import blue, green, red, yellow
from .differ import render_diff

logger = logging.getLogger("apisnap.compare")

STATUS_IDENTICAL = 'identical'
STATUS_DIFFERENT = 'different'
STATUS_MISSING = 'missing'

SEPARATOR = '=' * 60


class ComparisonSetupError(Exception):
    """The comparison cannot start: a directory is absent or empty."""

    def __init__(self, message: str, hint: str = ''):
        super().__init__(message)
        self.message = message
        self.hint = hint


@dataclass
class ComparisonResult:
    """Outcome for a single file pair."""

    filename: str
    status: str
    diff: Optional[str] = None
    added_count: int = 0
    removed_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'filename': self.filename,
            'status': self.status,
            'diff': self.diff,
            'added_count': self.added_count,
            'removed_count': self.removed_count,
        }


@dataclass
class ComparisonReport:
    """Aggregated results of a comparison run."""

    results: List[ComparisonResult] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)

    def _count(self, status: str) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def identical_count(self) -> int:
        return self._count(STATUS_IDENTICAL)

    @property
    def different_count(self) -> int:
        return self._count(STATUS_DIFFERENT)

    @property
    def missing_count(self) -> int:
        return self._count(STATUS_MISSING)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def exit_code(self) -> int:
        """0 only when every file is identical and nothing failed."""
        if self.errors:
            return 1
        return 0 if self.identical_count == self.total else 1


def read_capture(path: Path) -> str:
    """
    Read a capture file as UTF-8 without newline translation.

    Line endings are kept as stored, so CRLF and LF files compare as
    different. Invalid byte sequences become U+FFFD.
    """
    return path.read_bytes().decode('utf-8', errors='replace')


def compare_texts(filename: str, before_text: str, after_text: str) -> ComparisonResult:
    """Classify two loaded texts as identical or different."""
    summary = render_diff(before_text, after_text)
    if summary is None:
        return ComparisonResult(filename=filename, status=STATUS_IDENTICAL)

    return ComparisonResult(
        filename=filename,
        status=STATUS_DIFFERENT,
        diff=summary.text,
        added_count=summary.added_count,
        removed_count=summary.removed_count,
    )


class ResponseComparator:
    """
    Compare a "before" capture directory against an "after" one.

    Example:
        comparator = ResponseComparator('before', 'after')
        report = comparator.compare_all()
        sys.exit(report.exit_code)
    """

    def __init__(self, before_dir: str, after_dir: str, extension: str = '.json'):
        """
        Initialize comparator.

        Args:
            before_dir: Directory with the baseline captures
            after_dir: Directory with the new captures
            extension: Capture file extension to compare
        """
        self.before_dir = Path(before_dir)
        self.after_dir = Path(after_dir)
        self.extension = extension

    def list_files(self) -> List[str]:
        """
        Capture file names in the before directory, sorted.

        Raises:
            ComparisonSetupError: If a directory is absent or the before
                                  directory has no capture files
        """
        if not self.before_dir.is_dir():
            raise ComparisonSetupError(
                f"{self.before_dir.name}/ directory not found",
                f"Run: apisnap capture {self.before_dir.name} first",
            )
        if not self.after_dir.is_dir():
            raise ComparisonSetupError(
                f"{self.after_dir.name}/ directory not found",
                f"Run: apisnap capture {self.after_dir.name} to capture and compare",
            )

        files = sorted(
            p.name for p in self.before_dir.iterdir()
            if p.is_file() and p.name.endswith(self.extension)
        )
        if not files:
            raise ComparisonSetupError(
                f"No files in {self.before_dir.name}/ directory",
                f"Run: apisnap capture {self.before_dir.name} first",
            )
        return files

    def compare_file(self, filename: str) -> ComparisonResult:
        """Compare one file across both directories."""
        before_path = self.before_dir / filename
        after_path = self.after_dir / filename

        if not before_path.exists():
            return ComparisonResult(filename=filename, status=STATUS_MISSING, diff='Before file not found')
        if not after_path.exists():
            return ComparisonResult(filename=filename, status=STATUS_MISSING, diff='After file not found')

        return compare_texts(filename, read_capture(before_path), read_capture(after_path))

    def compare_all(self, verbose: bool = True) -> ComparisonReport:
        """
        Compare every capture file.

        Args:
            verbose: Print per-file status lines and diffs

        Returns:
            ComparisonReport

        Raises:
            ComparisonSetupError: See list_files()
        """
        files = self.list_files()
        report = ComparisonReport()

        for filename in files:
            result = self.compare_file(filename)
            report.results.append(result)
            logger.debug(f"{filename}: {result.status}")

            if verbose:
                print_result(result)

        return report


def print_result(result: ComparisonResult):
    """Print the status line (and diff) for one file."""
    if result.status == STATUS_IDENTICAL:
        print(green(f"✅ {result.filename}: No changes"))
    elif result.status == STATUS_DIFFERENT:
        print(yellow(f"\n⚠️  {result.filename}: CHANGED\n"))
        print(result.diff)
    else:
        print(red(f"❌ {result.filename}: MISSING"))
        print(f"   {result.diff}\n")


def print_summary(report: ComparisonReport):
    """Print totals and the final verdict."""
    print(SEPARATOR + '\n')
    print("📊 Comparison Summary:\n")
    print(f"   {green('Identical:')} {report.identical_count} files")
    print(f"   {yellow('Changed:')}   {report.different_count} files")
    print(f"   {red('Missing:')}   {report.missing_count} files")
    if report.errors:
        print(f"   {red('Errors:')}    {len(report.errors)} endpoints")
    print(f"   {blue('Total:')}     {report.total} files\n")

    if report.errors:
        print(red("❌ Some endpoints could not be fetched!\n"))
    elif report.different_count > 0:
        print(yellow("⚠️  API responses have changed!"))
        print("   Review the differences above.\n")
    elif report.missing_count > 0:
        print(red("❌ Some files are missing!\n"))
    else:
        print(green("✅ All API responses are identical!\n"))


def compare_all(before_dir: str, after_dir: str, extension: str = '.json') -> int:
    """
    Compare two capture directories and print a full report.

    Args:
        before_dir: Baseline directory
        after_dir: New capture directory
        extension: Capture file extension

    Returns:
        Process exit code: 0 if every file is identical, 1 otherwise
        (changes, missing files, or a missing/empty directory)
    """
    print(f"\n🔍 Comparing API responses: {Path(before_dir).name}/ vs {Path(after_dir).name}/\n")
    print(SEPARATOR + '\n')

    comparator = ResponseComparator(before_dir, after_dir, extension=extension)
    try:
        report = comparator.compare_all()
    except ComparisonSetupError as e:
        logger.error(e.message)
        print(red(f"❌ {e.message}"))
        if e.hint:
            print(f"   {e.hint}\n")
        return 1

    print_summary(report)
    return report.exit_code
