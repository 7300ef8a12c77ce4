"""Fixture store: the read-only collections every endpoint queries.

The store is built once from a directory of JSON files and never mutated.
Layout of the directory:

    countries.json          [ {code, name, budget, cpi, ...}, ... ]       (required)
    budget_history.json     { "BW": [ {year, value, ...}, ... ], ... }
    cpi_history.json        same shape as budget_history.json
    health_history.json     same shape
    education_history.json  same shape
    budget_breakdowns.json  { "BW": { "2023": {sectors, total}, ... }, ... }
    meetings.json           [ {id, date, countries, type, topic, leaders}, ... ]
    relationships.json      { "BW-US": {meeting_count, ...}, ... }
    corruption_cases.json   { "BW": [ {id, status, severity, ...}, ... ], ... }
    contracts.json          { "BW": [ {title, status, amount, ...}, ... ], ... }

Every file except countries.json is optional; a missing file loads as an
empty collection.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping

from utils.records import (
    BudgetBreakdown,
    Country,
    CorruptionCase,
    GovernmentContract,
    Meeting,
    MetricKind,
    MetricPoint,
    Relationship,
)

logger = logging.getLogger("transparency_api.fixtures")

COUNTRIES_FILE = "countries.json"
METRIC_FILES = {
    MetricKind.BUDGET: "budget_history.json",
    MetricKind.CPI: "cpi_history.json",
    MetricKind.HEALTH: "health_history.json",
    MetricKind.EDUCATION: "education_history.json",
}
BREAKDOWNS_FILE = "budget_breakdowns.json"
MEETINGS_FILE = "meetings.json"
RELATIONSHIPS_FILE = "relationships.json"
CORRUPTION_FILE = "corruption_cases.json"
CONTRACTS_FILE = "contracts.json"


class FixtureError(Exception):
    """Raised when the fixture directory or one of its files cannot be loaded."""


@dataclass(frozen=True)
class FixtureStore:
    """Immutable holder of every seed collection.

    Per-country collections are keyed by the code exactly as it appears in
    the fixture files.  ``fingerprint`` is a digest of the raw file bytes and
    changes whenever any fixture changes.
    """
    countries: tuple[Country, ...] = ()
    metrics: Mapping[MetricKind, Mapping[str, tuple[MetricPoint, ...]]] = field(
        default_factory=lambda: MappingProxyType({}))
    breakdowns: Mapping[str, Mapping[int, BudgetBreakdown]] = field(
        default_factory=lambda: MappingProxyType({}))
    meetings: tuple[Meeting, ...] = ()
    relationships: Mapping[str, Relationship] = field(
        default_factory=lambda: MappingProxyType({}))
    corruption_cases: Mapping[str, tuple[CorruptionCase, ...]] = field(
        default_factory=lambda: MappingProxyType({}))
    contracts: Mapping[str, tuple[GovernmentContract, ...]] = field(
        default_factory=lambda: MappingProxyType({}))
    fingerprint: str = ""

    def __post_init__(self) -> None:
        index = {c.code: c for c in self.countries}
        object.__setattr__(self, "_by_code", MappingProxyType(index))

    def country(self, code: str) -> Country | None:
        """Exact-match lookup on the canonical code (no normalization)."""
        return self._by_code.get(code)

    def metric_series(self, kind: MetricKind, code: str) -> tuple[MetricPoint, ...] | None:
        return self.metrics.get(kind, {}).get(code)

    def counts(self) -> dict[str, int]:
        """Record counts per collection, for health checks and logging."""
        return {
            "countries": len(self.countries),
            "metric_series": sum(len(by_code) for by_code in self.metrics.values()),
            "breakdowns": sum(len(years) for years in self.breakdowns.values()),
            "meetings": len(self.meetings),
            "relationships": len(self.relationships),
            "corruption_cases": sum(len(v) for v in self.corruption_cases.values()),
            "contracts": sum(len(v) for v in self.contracts.values()),
        }


# ── Loading ───────────────────────────────────────────────────────────────────

def _read_json(path: Path, required: bool, default: Any) -> tuple[Any, bytes]:
    if not path.exists():
        if required:
            raise FixtureError(f"Required fixture file missing: {path}")
        return default, b""
    raw = path.read_bytes()
    try:
        return json.loads(raw), raw
    except json.JSONDecodeError as e:
        raise FixtureError(f"Invalid JSON in {path.name}: {e}") from e


def _build(path: Path, fn: Callable[[], Any]) -> Any:
    """Run a record constructor, reporting malformed records by file name."""
    try:
        return fn()
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise FixtureError(f"Malformed record in {path.name}: {e!r}") from e


def _per_country(data: Mapping[str, list], make: Callable[[dict], Any]) -> Mapping[str, tuple]:
    return MappingProxyType({
        str(code): tuple(make(item) for item in items)
        for code, items in data.items()
    })


def _breakdowns(data: Mapping[str, Mapping[str, dict]]) -> Mapping[str, Mapping[int, BudgetBreakdown]]:
    out: dict[str, Mapping[int, BudgetBreakdown]] = {}
    for code, by_year in data.items():
        years = {int(y): BudgetBreakdown.from_dict(item, year=int(y)) for y, item in by_year.items()}
        out[str(code)] = MappingProxyType(years)
    return MappingProxyType(out)


def load_fixture_store(fixtures_dir: Path) -> FixtureStore:
    """Load every fixture file under *fixtures_dir* into a FixtureStore.

    Args:
        fixtures_dir: Directory containing the JSON fixture files.

    Returns:
        A fully populated, immutable FixtureStore.

    Raises:
        FixtureError: If the directory or countries.json is missing, a file is
            not valid JSON, or a record lacks a required field.
    """
    fixtures_dir = Path(fixtures_dir)
    if not fixtures_dir.is_dir():
        raise FixtureError(f"Fixture directory not found: {fixtures_dir}")

    digest = hashlib.sha256()

    def read(name: str, required: bool = False, default: Any = None) -> tuple[Path, Any]:
        path = fixtures_dir / name
        data, raw = _read_json(path, required, {} if default is None else default)
        digest.update(name.encode())
        digest.update(raw)
        return path, data

    path, data = read(COUNTRIES_FILE, required=True, default=[])
    countries = _build(path, lambda: tuple(Country.from_dict(c) for c in data))

    metrics: dict[MetricKind, Mapping[str, tuple[MetricPoint, ...]]] = {}
    for kind, name in METRIC_FILES.items():
        path, data = read(name)
        metrics[kind] = _build(path, lambda: _per_country(data, MetricPoint.from_dict))

    path, data = read(BREAKDOWNS_FILE)
    breakdowns = _build(path, lambda: _breakdowns(data))

    path, data = read(MEETINGS_FILE, default=[])
    meetings = _build(path, lambda: tuple(Meeting.from_dict(m) for m in data))

    path, data = read(RELATIONSHIPS_FILE)
    relationships = _build(path, lambda: MappingProxyType(
        {str(k): Relationship.from_dict(v) for k, v in data.items()}))

    path, data = read(CORRUPTION_FILE)
    cases = _build(path, lambda: _per_country(data, CorruptionCase.from_dict))

    path, data = read(CONTRACTS_FILE)
    contracts = _build(path, lambda: _per_country(data, GovernmentContract.from_dict))

    store = FixtureStore(
        countries=countries,
        metrics=MappingProxyType(metrics),
        breakdowns=breakdowns,
        meetings=meetings,
        relationships=relationships,
        corruption_cases=cases,
        contracts=contracts,
        fingerprint=digest.hexdigest()[:16],
    )
    logger.info("fixtures loaded from %s: %s", fixtures_dir, store.counts())
    return store
