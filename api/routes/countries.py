"""
Country endpoints.

GET /api/v1/countries                                     → [{code, name}]
GET /api/v1/countries/{code}                              → country details
GET /api/v1/countries/{code}/budget/breakdown             → latest (or ?year=) breakdown
GET /api/v1/countries/{code}/budget/breakdown/history     → breakdowns, year ascending
GET /api/v1/countries/{code}/{metric}                     → current value of a metric
GET /api/v1/countries/{code}/{metric}/history             → metric series, stored order

{metric} is one of budget, cpi, health, education.  Codes match in any
letter case.  An unknown code returns 404 "Country not found"; a known
country without the requested series returns a 404 naming the dataset.

The {metric} routes match any second path segment, so routers that add
other /countries/{code}/... paths must be included before this one.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from api.errors import require_found
from api.fixtures import get_store
from api.models import (
    BudgetBreakdownOut,
    CountryOut,
    CountrySummaryOut,
    ErrorResponse,
    MetricPointOut,
)
from utils.fixtures import FixtureStore
from utils.query import (
    YearRangeQuery,
    breakdown_for_year,
    breakdown_history,
    current_metric,
    filter_metric_history,
)
from utils.records import MetricKind
from utils.resolver import (
    NotFound,
    resolve_breakdowns,
    resolve_country,
    resolve_metric_series,
)

router = APIRouter(prefix="/countries", tags=["countries"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Country or dataset not found"}}


@router.get("", response_model=list[CountrySummaryOut], summary="List all countries")
def list_countries(store: FixtureStore = Depends(get_store)) -> list[dict]:
    """Return the code and name of every country, in fixture order."""
    return [c.summary() for c in store.countries]


@router.get(
    "/{code}",
    response_model=CountryOut,
    responses=_NOT_FOUND,
    summary="Get details for a specific country",
)
def get_country(code: str, store: FixtureStore = Depends(get_store)) -> dict:
    """Return the full country record, including current-year metrics."""
    return require_found(resolve_country(store, code)).to_dict()


# ── Budget breakdowns ─────────────────────────────────────────────────────────

@router.get(
    "/{code}/budget/breakdown",
    response_model=BudgetBreakdownOut,
    responses=_NOT_FOUND,
    summary="Get budget breakdown by sector",
)
def get_budget_breakdown(
    code: str,
    year: int | None = Query(None, description="Budget year (default: latest available)"),
    store: FixtureStore = Depends(get_store),
) -> dict:
    """Return the sector breakdown for *year*, or the most recent year."""
    breakdowns = require_found(resolve_breakdowns(store, code))
    breakdown = breakdown_for_year(breakdowns, year)
    if breakdown is None:
        raise HTTPException(status_code=404, detail=NotFound("dataset", "breakdown").message)
    return breakdown.to_dict()


@router.get(
    "/{code}/budget/breakdown/history",
    response_model=list[BudgetBreakdownOut],
    responses=_NOT_FOUND,
    summary="Get budget breakdown history",
)
def get_budget_breakdown_history(
    code: str,
    start_year: int | None = Query(None, description="First year to include"),
    end_year: int | None = Query(None, description="Last year to include"),
    store: FixtureStore = Depends(get_store),
) -> list[dict]:
    """Return every breakdown in the year range, sorted by year ascending."""
    breakdowns = require_found(resolve_breakdowns(store, code))
    query = YearRangeQuery(start_year=start_year, end_year=end_year)
    return [b.to_dict() for b in breakdown_history(breakdowns, query)]


# ── Yearly metrics ────────────────────────────────────────────────────────────

@router.get(
    "/{code}/{metric}",
    response_model=MetricPointOut,
    responses=_NOT_FOUND,
    summary="Get the current value of a metric",
)
def get_metric(
    code: str,
    metric: MetricKind,
    store: FixtureStore = Depends(get_store),
) -> dict:
    """Return the latest stored point of the budget, CPI, health or education series."""
    series = require_found(resolve_metric_series(store, code, metric))
    return current_metric(series).to_dict()


@router.get(
    "/{code}/{metric}/history",
    response_model=list[MetricPointOut],
    responses=_NOT_FOUND,
    summary="Get the history of a metric",
)
def get_metric_history(
    code: str,
    metric: MetricKind,
    start_year: int | None = Query(None, description="First year to include"),
    end_year: int | None = Query(None, description="Last year to include"),
    store: FixtureStore = Depends(get_store),
) -> list[dict]:
    """Return the metric series restricted to ``[start_year, end_year]``, in stored order."""
    series = require_found(resolve_metric_series(store, code, metric))
    query = YearRangeQuery(start_year=start_year, end_year=end_year)
    return [p.to_dict() for p in filter_metric_history(series, query)]
