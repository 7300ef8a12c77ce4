"""
World leader meeting endpoints.

GET /api/v1/meetings                            → all meetings, filtered
GET /api/v1/relationships                       → all country-pair relationships
GET /api/v1/countries/{code}/meetings           → meetings the country attended
GET /api/v1/countries/{code}/relationships      → relationships naming the country

Meeting filters: start_date / end_date (inclusive, YYYY-MM-DD), topic
(case-insensitive substring) and type (exact).  Meetings keep fixture order.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from api.errors import require_found
from api.fixtures import get_store
from api.models import ErrorResponse, MeetingOut, RelationshipOut
from utils.fixtures import FixtureStore
from utils.query import MeetingQuery, filter_meetings, relationships_for_country
from utils.resolver import resolve_country

router = APIRouter(tags=["meetings"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Country not found"}}


def _meeting_query(
    start_date: date | None = Query(None, description="Earliest meeting date (inclusive)"),
    end_date: date | None = Query(None, description="Latest meeting date (inclusive)"),
    topic: str | None = Query(None, description="Case-insensitive substring of the topic"),
    type: str | None = Query(None, description="Meeting type: bilateral or multilateral"),
) -> MeetingQuery:
    return MeetingQuery(start_date=start_date, end_date=end_date, topic=topic, type=type)


@router.get("/meetings", response_model=list[MeetingOut], summary="List world leader meetings")
def list_meetings(
    query: MeetingQuery = Depends(_meeting_query),
    store: FixtureStore = Depends(get_store),
) -> list[dict]:
    """Return meetings matching every supplied filter."""
    return [m.to_dict() for m in filter_meetings(store.meetings, query)]


@router.get(
    "/relationships",
    response_model=dict[str, RelationshipOut],
    summary="List country-pair relationships",
)
def list_relationships(store: FixtureStore = Depends(get_store)) -> dict:
    """Return every relationship keyed by ``"<codeA>-<codeB>"``."""
    return {k: r.to_dict() for k, r in store.relationships.items()}


@router.get(
    "/countries/{code}/meetings",
    response_model=list[MeetingOut],
    responses=_NOT_FOUND,
    summary="List meetings attended by a country",
)
def list_country_meetings(
    code: str,
    query: MeetingQuery = Depends(_meeting_query),
    store: FixtureStore = Depends(get_store),
) -> list[dict]:
    """Return the meetings whose participants include the country."""
    country = require_found(resolve_country(store, code))
    query = MeetingQuery(
        start_date=query.start_date,
        end_date=query.end_date,
        topic=query.topic,
        type=query.type,
        country=country.code,
    )
    return [m.to_dict() for m in filter_meetings(store.meetings, query)]


@router.get(
    "/countries/{code}/relationships",
    response_model=dict[str, RelationshipOut],
    responses=_NOT_FOUND,
    summary="List relationships of a country",
)
def list_country_relationships(code: str, store: FixtureStore = Depends(get_store)) -> dict:
    """Return the relationships whose key names the country as a party."""
    country = require_found(resolve_country(store, code))
    related = relationships_for_country(store.relationships, country.code)
    return {k: r.to_dict() for k, r in related.items()}
