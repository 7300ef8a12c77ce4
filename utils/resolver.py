"""Country resolver: map a user-supplied code to a fixture record.

Lookups return either the record or a ``NotFound`` value; nothing here
raises.  The HTTP layer decides how a ``NotFound`` is reported.

    resolve_country(store, "bw")                    -> Country(code="BW", ...)
    resolve_country(store, "ZZ")                    -> NotFound("country")
    resolve_metric_series(store, "DE", "education") -> NotFound("dataset", "education")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union

from utils.config import KnownValues
from utils.fixtures import FixtureStore
from utils.records import BudgetBreakdown, Country, MetricKind, MetricPoint
from utils.strings import normalize_code

COUNTRY = "country"
DATASET = "dataset"


@dataclass(frozen=True)
class NotFound:
    """A failed lookup.

    ``kind`` is ``"country"`` when the code is unknown, or ``"dataset"`` when
    the country exists but the requested series has no entries.
    """
    kind: str
    dataset: str | None = None

    @property
    def message(self) -> str:
        if self.kind == COUNTRY:
            return KnownValues.COUNTRY_NOT_FOUND
        return KnownValues.dataset_message(self.dataset or "")


CountryResult = Union[Country, NotFound]


def resolve_country(store: FixtureStore, code: str) -> CountryResult:
    """Return the Country for *code* (any letter case) or NotFound("country")."""
    country = store.country(normalize_code(code))
    if country is None:
        return NotFound(COUNTRY)
    return country


def resolve_metric_series(
    store: FixtureStore,
    code: str,
    kind: MetricKind | str,
) -> tuple[MetricPoint, ...] | NotFound:
    """Return the stored series of one metric for a country.

    Returns NotFound("country") for an unknown code and
    NotFound("dataset", kind) when the country has no points for the metric
    or *kind* is not a known metric.
    """
    country = resolve_country(store, code)
    if isinstance(country, NotFound):
        return country
    try:
        kind = MetricKind(kind)
    except ValueError:
        return NotFound(DATASET, str(kind))
    series = store.metric_series(kind, country.code)
    if not series:
        return NotFound(DATASET, kind.value)
    return series


def resolve_breakdowns(
    store: FixtureStore,
    code: str,
) -> Mapping[int, BudgetBreakdown] | NotFound:
    """Return a country's year-keyed budget breakdowns, or the matching NotFound."""
    country = resolve_country(store, code)
    if isinstance(country, NotFound):
        return country
    breakdowns = store.breakdowns.get(country.code)
    if not breakdowns:
        return NotFound(DATASET, "breakdown")
    return breakdowns
