"""Data validation utilities for the fixture store.

Provides reusable building blocks for:
- Collecting validation issues with a severity
- Running a registry of check functions against a FixtureStore
- Type/range predicates for years, amounts and scores
"""

from typing import List, Dict, Any, Callable, Optional

from utils.config import KnownValues
from utils.fixtures import FixtureStore

SEVERITIES = ("info", "warning", "error")


class ValidationIssue:
    """Represents a single validation issue found during checks."""

    def __init__(self, check_name: str, severity: str, detail: str,
                 sample: Optional[Any] = None, count: int = 1):
        """Initialize a validation issue.

        Args:
            check_name: Name of the check that found this issue
            severity: Issue severity ('error', 'warning', 'info')
            detail: Human-readable description of the issue
            sample: Example value that triggered the issue
            count: Number of affected records
        """
        self.check_name = check_name
        self.severity = severity
        self.detail = detail
        self.sample = sample
        self.count = count

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "check": self.check_name,
            "severity": self.severity,
            "detail": self.detail,
            "sample": str(self.sample) if self.sample is not None else None,
            "count": self.count,
        }

    def __repr__(self) -> str:
        return (f"ValidationIssue(check={self.check_name}, severity={self.severity}, "
                f"count={self.count})")


class ValidationResult:
    """Collects and reports on validation check results."""

    def __init__(self):
        self.issues: List[ValidationIssue] = []
        self.passed_checks: List[str] = []
        self.failed_checks: List[str] = []

    def add_issue(self, check_name: str, severity: str, detail: str,
                  sample: Optional[Any] = None, count: int = 1) -> None:
        self.issues.append(ValidationIssue(check_name, severity, detail, sample, count))

    def mark_check_passed(self, check_name: str) -> None:
        self.passed_checks.append(check_name)

    def mark_check_failed(self, check_name: str) -> None:
        self.failed_checks.append(check_name)

    def get_issues_by_severity(self, severity: str) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == severity]

    def error_count(self) -> int:
        return len(self.get_issues_by_severity("error"))

    def warning_count(self) -> int:
        return len(self.get_issues_by_severity("warning"))

    def info_count(self) -> int:
        return len(self.get_issues_by_severity("info"))

    def exceeds(self, threshold: str) -> bool:
        """True if any issue is at or above *threshold* severity."""
        floor = SEVERITIES.index(threshold)
        return any(SEVERITIES.index(i.severity) >= floor for i in self.issues)

    def summary_text(self) -> str:
        """Generate human-readable validation summary."""
        lines = []
        lines.append("Validation Summary:")
        lines.append(f"  Passed Checks: {len(self.passed_checks)}")
        lines.append(f"  Failed Checks: {len(self.failed_checks)}")
        lines.append(f"  Issues: {len(self.issues)}")
        lines.append(f"    - Errors: {self.error_count()}")
        lines.append(f"    - Warnings: {self.warning_count()}")
        lines.append(f"    - Info: {self.info_count()}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "passed_checks": self.passed_checks,
            "failed_checks": self.failed_checks,
            "issues": [i.to_dict() for i in self.issues],
            "summary": {
                "total_checks": len(self.passed_checks) + len(self.failed_checks),
                "passed": len(self.passed_checks),
                "failed": len(self.failed_checks),
                "issues": len(self.issues),
                "errors": self.error_count(),
                "warnings": self.warning_count(),
                "info": self.info_count(),
            }
        }


class ValidationRegistry:
    """Manages a collection of validation check functions."""

    def __init__(self):
        self.checks: Dict[str, Callable[[FixtureStore], List[ValidationIssue]]] = {}

    def register(self, name: str, check_fn: Callable[[FixtureStore], List[ValidationIssue]]) -> None:
        """Register a validation check function.

        Args:
            name: Human-readable check name
            check_fn: Function taking a FixtureStore and returning List[ValidationIssue]
        """
        self.checks[name] = check_fn

    def run_all(self, store: FixtureStore,
                skip_checks: Optional[List[str]] = None) -> ValidationResult:
        """Run all registered checks.

        A check that raises is recorded as a failed check with an error issue
        rather than aborting the run.

        Args:
            store: Fixture store to validate
            skip_checks: List of check names to skip

        Returns:
            ValidationResult with all issues found
        """
        skip = skip_checks or []
        result = ValidationResult()

        for check_name, check_fn in self.checks.items():
            if check_name in skip:
                continue

            try:
                issues = check_fn(store)
                if issues:
                    for issue in issues:
                        result.add_issue(issue.check_name, issue.severity,
                                         issue.detail, issue.sample, issue.count)
                    result.mark_check_failed(check_name)
                else:
                    result.mark_check_passed(check_name)
            except Exception as e:
                result.add_issue(
                    check_name, "error",
                    f"Check raised exception: {str(e)[:100]}"
                )
                result.mark_check_failed(check_name)

        return result


def is_valid_year(year: int) -> bool:
    """Check if year is a plausible data year (1900-2100)."""
    return isinstance(year, int) and not isinstance(year, bool) and 1900 <= year <= 2100


def is_valid_amount(value: float) -> bool:
    """Check if value is a valid non-negative monetary amount."""
    if not isinstance(value, (int, float)):
        return False
    if isinstance(value, bool):  # bool is subclass of int
        return False
    return value >= 0


def is_valid_transparency_score(value: Optional[float]) -> bool:
    """Check a contract transparency score; a missing score is valid."""
    if value is None:
        return True
    low, high = KnownValues.TRANSPARENCY_SCORE_RANGE
    return is_valid_amount(value) and low <= value <= high
