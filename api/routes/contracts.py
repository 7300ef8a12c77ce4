"""
Government contract endpoints.

GET /api/v1/contracts                          → contracts of every country
GET /api/v1/countries/{code}/contracts         → one country's contracts
GET /api/v1/countries/{code}/contracts/summary → totals and average transparency
"""

from fastapi import APIRouter, Depends, Query

from api.errors import require_found
from api.fixtures import get_store
from api.models import ContractOut, ContractSummaryOut, ErrorResponse
from utils.aggregation import flatten_with_country_tag, summarize_contracts
from utils.fixtures import FixtureStore
from utils.query import ContractQuery, filter_contracts
from utils.resolver import resolve_country

router = APIRouter(tags=["contracts"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Country not found"}}


def _country_contracts(store: FixtureStore, code: str) -> list:
    country = require_found(resolve_country(store, code))
    return flatten_with_country_tag({country.code: store.contracts.get(country.code, ())})


@router.get(
    "/contracts",
    response_model=list[ContractOut],
    summary="List government contracts across countries",
)
def list_contracts(
    status: str | None = Query(None, description="ongoing | completed | cancelled"),
    min_amount: float | None = Query(
        None, allow_inf_nan=False, description="Minimum contract amount (inclusive)"),
    country: str | None = Query(None, description="Country code (any letter case)"),
    store: FixtureStore = Depends(get_store),
) -> list[dict]:
    """Return matching contracts, largest amount first."""
    contracts = flatten_with_country_tag(store.contracts)
    query = ContractQuery(status=status, min_amount=min_amount, country=country)
    return [c.to_dict() for c in filter_contracts(contracts, query)]


@router.get(
    "/countries/{code}/contracts",
    response_model=list[ContractOut],
    responses=_NOT_FOUND,
    summary="List government contracts for a country",
)
def list_country_contracts(
    code: str,
    status: str | None = Query(None, description="ongoing | completed | cancelled"),
    min_amount: float | None = Query(
        None, allow_inf_nan=False, description="Minimum contract amount (inclusive)"),
    store: FixtureStore = Depends(get_store),
) -> list[dict]:
    query = ContractQuery(status=status, min_amount=min_amount)
    return [c.to_dict() for c in filter_contracts(_country_contracts(store, code), query)]


@router.get(
    "/countries/{code}/contracts/summary",
    response_model=ContractSummaryOut,
    responses=_NOT_FOUND,
    summary="Summarize government contracts for a country",
)
def get_country_contract_summary(code: str, store: FixtureStore = Depends(get_store)) -> dict:
    """Return contract count, total value and mean transparency score."""
    return summarize_contracts(_country_contracts(store, code))
