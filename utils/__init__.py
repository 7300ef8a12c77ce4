"""Shared utilities for the transparency API: fixture records, the fixture
store, the filter/sort engine, the country resolver and validation helpers."""

# Records
from utils.records import (
    MetricKind,
    Country,
    MetricPoint,
    BudgetBreakdown,
    Meeting,
    Relationship,
    CorruptionCase,
    GovernmentContract,
)

# Fixture store
from utils.fixtures import FixtureError, FixtureStore, load_fixture_store

# String utilities
from utils.strings import normalize_code, contains_ci, parse_iso_date

# Filter/sort engine
from utils.query import (
    YearRangeQuery,
    MeetingQuery,
    CorruptionCaseQuery,
    ContractQuery,
    filter_metric_history,
    current_metric,
    breakdown_history,
    breakdown_for_year,
    latest_breakdown_year,
    filter_meetings,
    relationships_for_country,
    filter_corruption_cases,
    filter_contracts,
)

# Country resolver
from utils.resolver import NotFound, resolve_country, resolve_metric_series, resolve_breakdowns

# Aggregation helpers
from utils.aggregation import (
    flatten_with_country_tag,
    summarize_corruption_cases,
    summarize_contracts,
)

# Validation utilities
from utils.validation import (
    ValidationIssue,
    ValidationResult,
    ValidationRegistry,
    is_valid_year,
    is_valid_amount,
    is_valid_transparency_score,
)

# Configuration
from utils.config import AppConfig, KnownValues

__all__ = [
    # Records
    "MetricKind",
    "Country",
    "MetricPoint",
    "BudgetBreakdown",
    "Meeting",
    "Relationship",
    "CorruptionCase",
    "GovernmentContract",
    # Fixture store
    "FixtureError",
    "FixtureStore",
    "load_fixture_store",
    # Strings
    "normalize_code",
    "contains_ci",
    "parse_iso_date",
    # Query engine
    "YearRangeQuery",
    "MeetingQuery",
    "CorruptionCaseQuery",
    "ContractQuery",
    "filter_metric_history",
    "current_metric",
    "breakdown_history",
    "breakdown_for_year",
    "latest_breakdown_year",
    "filter_meetings",
    "relationships_for_country",
    "filter_corruption_cases",
    "filter_contracts",
    # Resolver
    "NotFound",
    "resolve_country",
    "resolve_metric_series",
    "resolve_breakdowns",
    # Aggregation
    "flatten_with_country_tag",
    "summarize_corruption_cases",
    "summarize_contracts",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    "ValidationRegistry",
    "is_valid_year",
    "is_valid_amount",
    "is_valid_transparency_score",
    # Config
    "AppConfig",
    "KnownValues",
]
