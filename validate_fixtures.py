"""
Fixture Validation Suite

Runs consistency checks against the JSON fixture directory and prints a
summary report flagging anomalies the API would otherwise serve silently.

Usage:
    python validate_fixtures.py                          # Default fixtures (data/)
    python validate_fixtures.py --fixtures path/to/dir   # Custom directory
    python validate_fixtures.py --verbose                # Show all issue details
    python validate_fixtures.py --json                   # JSON output
    python validate_fixtures.py --threshold warning      # Exit non-zero on warnings+

Exit status: 0 when no issue reaches the threshold, 1 when one does, 2 when
the fixtures cannot be loaded at all.
"""

import argparse
import json
import sys
from collections import Counter
from pathlib import Path

from utils.config import AppConfig, KnownValues
from utils.fixtures import FixtureError, FixtureStore, load_fixture_store
from utils.patterns import COUNTRY_CODE
from utils.query import relationship_countries
from utils.strings import parse_iso_date
from utils.validation import (
    SEVERITIES,
    ValidationIssue,
    ValidationRegistry,
    ValidationResult,
    is_valid_amount,
    is_valid_transparency_score,
    is_valid_year,
)

# Relative gap between a breakdown's published total and its sector sum
BREAKDOWN_TOLERANCE = 0.01

_MAX_SAMPLES = 20


# ── Individual checks ────────────────────────────────────────────────────────

def check_country_codes(store: FixtureStore) -> list[ValidationIssue]:
    """Country codes must be unique and 2-3 uppercase letters."""
    issues = []
    dupes = [code for code, n in Counter(c.code for c in store.countries).items() if n > 1]
    for code in dupes:
        issues.append(ValidationIssue(
            "country_codes", "error", f"Duplicate country code {code!r}", sample=code))
    bad = [c.code for c in store.countries if not COUNTRY_CODE.match(c.code)]
    if bad:
        issues.append(ValidationIssue(
            "country_codes", "error",
            "Country codes must be 2-3 uppercase letters; lookups will never match them",
            sample=bad[0], count=len(bad)))
    return issues


def check_metric_histories(store: FixtureStore) -> list[ValidationIssue]:
    """Each series must hold plausible, unique years in ascending order.

    The current value of a metric is the last stored point, so an unsorted
    series reports the wrong year as current.
    """
    issues = []
    for kind, by_code in store.metrics.items():
        for code, series in by_code.items():
            years = [p.year for p in series]
            if len(set(years)) != len(years):
                issues.append(ValidationIssue(
                    "metric_histories", "error",
                    f"{kind.value} history for {code} repeats a year", sample=years))
            if years != sorted(years):
                issues.append(ValidationIssue(
                    "metric_histories", "warning",
                    f"{kind.value} history for {code} is not in ascending year order; "
                    f"current value would be {years[-1]}",
                    sample=years))
            bad = [y for y in years if not is_valid_year(y)]
            if bad:
                issues.append(ValidationIssue(
                    "metric_histories", "error",
                    f"{kind.value} history for {code} has implausible years",
                    sample=bad, count=len(bad)))
    return issues


def check_orphan_series(store: FixtureStore) -> list[ValidationIssue]:
    """Per-country collections keyed by a code with no country record."""
    known = {c.code for c in store.countries}
    collections = {f"{kind.value} history": by_code for kind, by_code in store.metrics.items()}
    collections["budget breakdowns"] = store.breakdowns
    collections["corruption cases"] = store.corruption_cases
    collections["contracts"] = store.contracts

    issues = []
    for label, by_code in collections.items():
        orphans = sorted(code for code in by_code if code not in known)
        if orphans:
            issues.append(ValidationIssue(
                "orphan_series", "warning",
                f"{label} keyed by unknown countries (unreachable through the API)",
                sample=orphans, count=len(orphans)))

    for key in store.relationships:
        unknown = [code for code in relationship_countries(key) if code not in known]
        if unknown:
            issues.append(ValidationIssue(
                "orphan_series", "info",
                f"Relationship {key!r} names unknown countries", sample=unknown))
    return issues


def check_breakdown_totals(store: FixtureStore) -> list[ValidationIssue]:
    """Published totals should match the sector sum within 1%."""
    issues = []
    for code, by_year in store.breakdowns.items():
        for year, breakdown in sorted(by_year.items()):
            if breakdown.year != year:
                issues.append(ValidationIssue(
                    "breakdown_totals", "error",
                    f"{code} breakdown filed under {year} declares year {breakdown.year}"))
            sector_sum = breakdown.sector_sum()
            if breakdown.total <= 0:
                issues.append(ValidationIssue(
                    "breakdown_totals", "error",
                    f"{code} {year} breakdown has non-positive total", sample=breakdown.total))
                continue
            gap = abs(breakdown.total - sector_sum) / breakdown.total
            if gap > BREAKDOWN_TOLERANCE:
                issues.append(ValidationIssue(
                    "breakdown_totals", "warning",
                    f"{code} {year} sectors sum to {sector_sum:,.0f} but total is "
                    f"{breakdown.total:,.0f} ({gap:.1%} apart)",
                    sample=sorted(breakdown.sectors)))
    return issues


def check_meetings(store: FixtureStore) -> list[ValidationIssue]:
    """Meetings need two or more countries, a known type and a parseable date."""
    issues = []
    ids = Counter(m.id for m in store.meetings)
    for meeting_id, n in ids.items():
        if n > 1:
            issues.append(ValidationIssue(
                "meetings", "error", f"Meeting id {meeting_id!r} used {n} times", count=n))
    for m in store.meetings:
        if len(m.countries) < 2:
            issues.append(ValidationIssue(
                "meetings", "error", f"Meeting {m.id} lists fewer than two countries",
                sample=list(m.countries)))
        if m.type not in KnownValues.MEETING_TYPES:
            issues.append(ValidationIssue(
                "meetings", "warning", f"Meeting {m.id} has unknown type", sample=m.type))
        if parse_iso_date(m.date) is None:
            issues.append(ValidationIssue(
                "meetings", "error",
                f"Meeting {m.id} date is not YYYY-MM-DD; date filters will skip it",
                sample=m.date))
    return issues


def check_corruption_cases(store: FixtureStore) -> list[ValidationIssue]:
    issues = []
    for code, cases in store.corruption_cases.items():
        for case in cases:
            where = f"{code} case {case.id}"
            if case.status not in KnownValues.CASE_STATUSES:
                issues.append(ValidationIssue(
                    "corruption_cases", "warning", f"{where} has unknown status",
                    sample=case.status))
            if not KnownValues.is_valid_severity(case.severity):
                issues.append(ValidationIssue(
                    "corruption_cases", "warning", f"{where} has unknown severity",
                    sample=case.severity))
            if parse_iso_date(case.date_reported) is None:
                issues.append(ValidationIssue(
                    "corruption_cases", "error", f"{where} date_reported is not YYYY-MM-DD",
                    sample=case.date_reported))
            if not is_valid_amount(case.amount_involved):
                issues.append(ValidationIssue(
                    "corruption_cases", "error", f"{where} has a negative amount_involved",
                    sample=case.amount_involved))
    return issues


def check_contracts(store: FixtureStore) -> list[ValidationIssue]:
    issues = []
    for code, contracts in store.contracts.items():
        for contract in contracts:
            where = f"{code} contract {contract.id or contract.title!r}"
            if contract.status not in KnownValues.CONTRACT_STATUSES:
                issues.append(ValidationIssue(
                    "contracts", "warning", f"{where} has unknown status",
                    sample=contract.status))
            if not is_valid_amount(contract.amount):
                issues.append(ValidationIssue(
                    "contracts", "error", f"{where} has a negative amount",
                    sample=contract.amount))
            if not is_valid_transparency_score(contract.transparency_score):
                issues.append(ValidationIssue(
                    "contracts", "error", f"{where} transparency_score outside 0-10",
                    sample=contract.transparency_score))
    return issues


ALL_CHECKS = [
    ("country_codes", check_country_codes),
    ("metric_histories", check_metric_histories),
    ("orphan_series", check_orphan_series),
    ("breakdown_totals", check_breakdown_totals),
    ("meetings", check_meetings),
    ("corruption_cases", check_corruption_cases),
    ("contracts", check_contracts),
]


def build_registry() -> ValidationRegistry:
    """Return a registry holding every fixture check."""
    registry = ValidationRegistry()
    for name, check_fn in ALL_CHECKS:
        registry.register(name, check_fn)
    return registry


def run_checks(store: FixtureStore, skip_checks: list[str] | None = None) -> ValidationResult:
    return build_registry().run_all(store, skip_checks=skip_checks)


# ── Reporting ─────────────────────────────────────────────────────────────────

def generate_json_report(store: FixtureStore, result: ValidationResult) -> dict:
    """Machine-readable report for ``--json``."""
    report = result.to_dict()
    report["fixtures"] = store.counts()
    report["fingerprint"] = store.fingerprint
    return report


def generate_report(store: FixtureStore, result: ValidationResult,
                    verbose: bool = False) -> str:
    """Human-readable report: overview, one line per check, summary."""
    lines = ["=" * 65, "  FIXTURE VALIDATION REPORT", "=" * 65, "", "  Fixture overview:"]
    for name, count in store.counts().items():
        lines.append(f"    {name.replace('_', ' ').capitalize() + ':':<18}{count:,}")

    for check_name, _ in ALL_CHECKS:
        issues = [i for i in result.issues if i.check_name == check_name]
        if check_name in result.passed_checks:
            status = "PASS"
        elif check_name not in result.failed_checks:
            status = "SKIP"
        elif any(i.severity == "error" for i in issues):
            status = "FAIL"
        else:
            status = "WARN"
        lines.append("")
        lines.append(f"  [{status:>4}] {check_name} ({len(issues)} issue(s))")
        if verbose:
            for issue in issues[:_MAX_SAMPLES]:
                lines.append(f"         [{issue.severity.upper()}] {issue.detail}")
                if issue.sample is not None:
                    lines.append(f"           sample: {issue.sample}")
            if len(issues) > _MAX_SAMPLES:
                lines.append(f"         ... and {len(issues) - _MAX_SAMPLES} more")

    lines.append("")
    lines.append("=" * 65)
    if not result.issues:
        lines.append("  RESULT: ALL CHECKS PASSED")
    else:
        lines.append(f"  RESULT: {len(result.issues)} issue(s) found")
    lines.append("")
    lines.extend(f"  {line}" for line in result.summary_text().splitlines())
    lines.append("=" * 65)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run every check and return the exit status."""
    parser = argparse.ArgumentParser(
        description="Validate the JSON fixtures served by the transparency API")
    parser.add_argument("--fixtures", type=Path, default=None,
                        help="Fixture directory (default: data/ or APP_FIXTURES_DIR)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show details for each issue found")
    parser.add_argument("--json", action="store_true",
                        help="Output results as JSON")
    parser.add_argument("--threshold", default="error", choices=list(SEVERITIES),
                        help="Exit non-zero if issues at/above this severity (default: error)")
    parser.add_argument("--skip", action="append", default=[], metavar="CHECK",
                        help="Skip a check by name (repeatable)")
    args = parser.parse_args(argv)

    fixtures_dir = args.fixtures or AppConfig.from_env().fixtures_dir
    try:
        store = load_fixture_store(fixtures_dir)
    except FixtureError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    result = run_checks(store, skip_checks=args.skip)
    if args.json:
        print(json.dumps(generate_json_report(store, result), indent=2))
    else:
        print(generate_report(store, result, verbose=args.verbose))
    return 1 if result.exceeds(args.threshold) else 0


if __name__ == "__main__":
    sys.exit(main())
