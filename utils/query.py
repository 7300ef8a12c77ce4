"""Record filter/sort engine shared by every list endpoint.

Each entity kind has an explicit query object listing the constraints it
understands.  A constraint left as ``None`` (or an empty string for text
constraints) is a wildcard.  All supplied constraints are ANDed.

    Entity              Query                 Ordering of the result
    ------------------  --------------------  -------------------------------
    Meeting             MeetingQuery          input order
    CorruptionCase      CorruptionCaseQuery   date_reported, newest first
    GovernmentContract  ContractQuery         amount, largest first
    MetricPoint         YearRangeQuery        input order (stored ascending)
    BudgetBreakdown     YearRangeQuery        year ascending (re-sorted)

The functions are pure: they never mutate their inputs and return new lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Sequence

from utils.patterns import RELATIONSHIP_KEY_SEPARATOR
from utils.records import (
    BudgetBreakdown,
    CorruptionCase,
    GovernmentContract,
    Meeting,
    MetricPoint,
    Relationship,
)
from utils.strings import contains_ci, normalize_code, parse_iso_date


# ── Query objects ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class YearRangeQuery:
    """Inclusive ``[start_year, end_year]`` bound; either side may be open."""
    start_year: int | None = None
    end_year: int | None = None

    def matches(self, year: int) -> bool:
        if self.start_year is not None and year < self.start_year:
            return False
        if self.end_year is not None and year > self.end_year:
            return False
        return True


@dataclass(frozen=True)
class MeetingQuery:
    start_date: date | None = None
    end_date: date | None = None
    topic: str | None = None
    type: str | None = None
    country: str | None = None

    def matches(self, meeting: Meeting) -> bool:
        if self.start_date is not None or self.end_date is not None:
            held = parse_iso_date(meeting.date)
            # An unparsable meeting date never satisfies a date bound
            if held is None:
                return False
            if self.start_date is not None and held < self.start_date:
                return False
            if self.end_date is not None and held > self.end_date:
                return False
        if self.topic and not contains_ci(meeting.topic, self.topic):
            return False
        if self.type and meeting.type != self.type:
            return False
        if self.country and normalize_code(self.country) not in meeting.countries:
            return False
        return True


@dataclass(frozen=True)
class CorruptionCaseQuery:
    status: str | None = None
    severity: str | None = None
    country: str | None = None

    def matches(self, case: CorruptionCase) -> bool:
        if self.status and case.status != self.status:
            return False
        if self.severity and case.severity != self.severity:
            return False
        if self.country and case.country_code != normalize_code(self.country):
            return False
        return True


@dataclass(frozen=True)
class ContractQuery:
    status: str | None = None
    min_amount: float | None = None
    country: str | None = None

    def matches(self, contract: GovernmentContract) -> bool:
        if self.status and contract.status != self.status:
            return False
        if self.min_amount is not None and contract.amount < self.min_amount:
            return False
        if self.country and contract.country_code != normalize_code(self.country):
            return False
        return True


# ── Metric histories ──────────────────────────────────────────────────────────

def filter_metric_history(
    series: Sequence[MetricPoint],
    query: YearRangeQuery | None = None,
) -> list[MetricPoint]:
    """Return the points of *series* inside the year range, in stored order."""
    query = query or YearRangeQuery()
    return [p for p in series if query.matches(p.year)]


def current_metric(series: Sequence[MetricPoint]) -> MetricPoint | None:
    """Return the last stored point of an ascending series.

    This is positional, not a maximum over ``year``: an out-of-order series
    yields whatever was stored last.  ``validate_fixtures.py`` reports such
    series.
    """
    return series[-1] if series else None


# ── Budget breakdowns ─────────────────────────────────────────────────────────

def breakdown_history(
    breakdowns: Mapping[int, BudgetBreakdown],
    query: YearRangeQuery | None = None,
) -> list[BudgetBreakdown]:
    """Flatten a year-keyed breakdown mapping, filter it and sort by year ascending."""
    query = query or YearRangeQuery()
    items = [b for year, b in breakdowns.items() if query.matches(year)]
    return sorted(items, key=lambda b: b.year)


def latest_breakdown_year(breakdowns: Mapping[int, BudgetBreakdown]) -> int | None:
    years = sorted(breakdowns.keys(), reverse=True)
    return years[0] if years else None


def breakdown_for_year(
    breakdowns: Mapping[int, BudgetBreakdown],
    year: int | None = None,
) -> BudgetBreakdown | None:
    """Return the breakdown for *year*, or the latest one when *year* is None."""
    if year is None:
        year = latest_breakdown_year(breakdowns)
        if year is None:
            return None
    return breakdowns.get(year)


# ── Meetings and relationships ────────────────────────────────────────────────

def filter_meetings(
    meetings: Iterable[Meeting],
    query: MeetingQuery | None = None,
) -> list[Meeting]:
    query = query or MeetingQuery()
    return [m for m in meetings if query.matches(m)]


def relationship_countries(key: str) -> tuple[str, ...]:
    """Split a relationship key into its country codes: ``"BW-US"`` -> ``("BW", "US")``."""
    return tuple(normalize_code(part) for part in RELATIONSHIP_KEY_SEPARATOR.split(key) if part)


def relationships_for_country(
    relationships: Mapping[str, Relationship],
    code: str,
) -> dict[str, Relationship]:
    """Return the relationships whose key names *code* as one of its parties.

    Keys are compared token by token, so ``"US"`` does not match ``"AUS-BW"``.
    """
    code = normalize_code(code)
    return {k: r for k, r in relationships.items() if code in relationship_countries(k)}


# ── Corruption cases and contracts ────────────────────────────────────────────

def _reported_key(case: CorruptionCase) -> tuple[bool, date]:
    reported = parse_iso_date(case.date_reported)
    # Unparsable dates sort after every real date when ordering newest first
    return (reported is not None, reported or date.min)


def filter_corruption_cases(
    cases: Iterable[CorruptionCase],
    query: CorruptionCaseQuery | None = None,
) -> list[CorruptionCase]:
    """Filter cases and order them by ``date_reported``, most recent first."""
    query = query or CorruptionCaseQuery()
    matched = [c for c in cases if query.matches(c)]
    return sorted(matched, key=_reported_key, reverse=True)


def filter_contracts(
    contracts: Iterable[GovernmentContract],
    query: ContractQuery | None = None,
) -> list[GovernmentContract]:
    """Filter contracts and order them by ``amount``, largest first."""
    query = query or ContractQuery()
    matched = [c for c in contracts if query.matches(c)]
    return sorted(matched, key=lambda c: c.amount, reverse=True)
