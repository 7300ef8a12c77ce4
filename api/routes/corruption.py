"""
Corruption case endpoints.

GET /api/v1/corruption-cases                          → cases of every country
GET /api/v1/countries/{code}/corruption-cases         → one country's cases
GET /api/v1/countries/{code}/corruption-cases/summary → counts by severity/status

Filters (status, severity, country) are exact; results are ordered by
date_reported, most recent first.
"""

from fastapi import APIRouter, Depends, Query

from api.errors import require_found
from api.fixtures import get_store
from api.models import CorruptionCaseOut, CorruptionSummaryOut, ErrorResponse
from utils.aggregation import flatten_with_country_tag, summarize_corruption_cases
from utils.fixtures import FixtureStore
from utils.query import CorruptionCaseQuery, filter_corruption_cases
from utils.resolver import resolve_country

router = APIRouter(tags=["corruption"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Country not found"}}


def _country_cases(store: FixtureStore, code: str) -> list:
    country = require_found(resolve_country(store, code))
    return flatten_with_country_tag(
        {country.code: store.corruption_cases.get(country.code, ())}
    )


@router.get(
    "/corruption-cases",
    response_model=list[CorruptionCaseOut],
    summary="List corruption cases across countries",
)
def list_corruption_cases(
    status: str | None = Query(None, description="ongoing | resolved | closed"),
    severity: str | None = Query(None, description="low | medium | high | critical"),
    country: str | None = Query(None, description="Country code (any letter case)"),
    store: FixtureStore = Depends(get_store),
) -> list[dict]:
    cases = flatten_with_country_tag(store.corruption_cases)
    query = CorruptionCaseQuery(status=status, severity=severity, country=country)
    return [c.to_dict() for c in filter_corruption_cases(cases, query)]


@router.get(
    "/countries/{code}/corruption-cases",
    response_model=list[CorruptionCaseOut],
    responses=_NOT_FOUND,
    summary="List corruption cases for a country",
)
def list_country_corruption_cases(
    code: str,
    status: str | None = Query(None, description="ongoing | resolved | closed"),
    severity: str | None = Query(None, description="low | medium | high | critical"),
    store: FixtureStore = Depends(get_store),
) -> list[dict]:
    """Return the country's cases, newest first.

    A known country with no recorded cases returns an empty list.
    """
    cases = _country_cases(store, code)
    query = CorruptionCaseQuery(status=status, severity=severity)
    return [c.to_dict() for c in filter_corruption_cases(cases, query)]


@router.get(
    "/countries/{code}/corruption-cases/summary",
    response_model=CorruptionSummaryOut,
    responses=_NOT_FOUND,
    summary="Summarize corruption cases for a country",
)
def get_country_corruption_summary(code: str, store: FixtureStore = Depends(get_store)) -> dict:
    return summarize_corruption_cases(_country_cases(store, code))
