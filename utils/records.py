"""Immutable record types held by the fixture store.

Every record is a frozen dataclass built from one JSON object by its
``from_dict`` constructor and serialised back with ``to_dict``.  Records are
shared between requests, so nothing downstream may mutate them; derived
values (e.g. a case tagged with its country) are produced with
``dataclasses.replace``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


class MetricKind(str, enum.Enum):
    """Yearly metric series kept per country."""
    BUDGET = "budget"
    CPI = "cpi"
    HEALTH = "health"
    EDUCATION = "education"


def _opt_float(value: Any) -> float | None:
    return None if value is None else float(value)


# ── Countries and yearly metrics ──────────────────────────────────────────────

@dataclass(frozen=True)
class Country:
    """A country with its current-year scalar metrics."""
    code: str
    name: str
    budget: float | None = None
    cpi: float | None = None
    health_exp: float | None = None
    education_exp: float | None = None
    currency: str | None = None
    region: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Country":
        return cls(
            code=str(data["code"]),
            name=str(data["name"]),
            budget=_opt_float(data.get("budget")),
            cpi=_opt_float(data.get("cpi")),
            health_exp=_opt_float(data.get("health_exp")),
            education_exp=_opt_float(data.get("education_exp")),
            currency=data.get("currency"),
            region=data.get("region"),
        )

    def summary(self) -> dict[str, str]:
        return {"code": self.code, "name": self.name}

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "budget": self.budget,
            "cpi": self.cpi,
            "health_exp": self.health_exp,
            "education_exp": self.education_exp,
            "currency": self.currency,
            "region": self.region,
        }


@dataclass(frozen=True)
class MetricPoint:
    """One year of a metric series (budget, CPI, health or education)."""
    year: int
    value: float
    currency: str | None = None
    source: str | None = None
    timestamp: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MetricPoint":
        return cls(
            year=int(data["year"]),
            value=float(data["value"]),
            currency=data.get("currency"),
            source=data.get("source"),
            timestamp=data.get("timestamp"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "value": self.value,
            "currency": self.currency,
            "source": self.source,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class BudgetBreakdown:
    """Sector decomposition of one year's budget.

    ``total`` is stored as published; it is not recomputed from ``sectors``.
    """
    year: int
    sectors: Mapping[str, float] = field(default_factory=dict)
    total: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sectors", MappingProxyType(dict(self.sectors)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], year: int | None = None) -> "BudgetBreakdown":
        return cls(
            year=int(data.get("year", year)),
            sectors={str(k): float(v) for k, v in (data.get("sectors") or {}).items()},
            total=float(data.get("total", 0.0)),
        )

    def sector_sum(self) -> float:
        return sum(self.sectors.values())

    def to_dict(self) -> dict[str, Any]:
        return {"year": self.year, "sectors": dict(self.sectors), "total": self.total}


# ── Diplomacy ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Meeting:
    """A meeting between the leaders of two or more countries."""
    id: int | str
    date: str
    countries: tuple[str, ...]
    type: str
    topic: str
    leaders: tuple[str, ...] = ()
    location: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Meeting":
        return cls(
            id=data["id"],
            date=str(data["date"]),
            countries=tuple(str(c) for c in data.get("countries", ())),
            type=str(data["type"]),
            topic=str(data.get("topic", "")),
            leaders=tuple(str(name) for name in data.get("leaders", ())),
            location=data.get("location"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "countries": list(self.countries),
            "type": self.type,
            "topic": self.topic,
            "leaders": list(self.leaders),
            "location": self.location,
        }


@dataclass(frozen=True)
class Relationship:
    """Meeting statistics for one country pair (keyed ``"AA-BB"`` in the store)."""
    meeting_count: int
    relationship_strength: float
    common_topics: tuple[str, ...] = ()
    last_meeting: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Relationship":
        return cls(
            meeting_count=int(data["meeting_count"]),
            relationship_strength=float(data["relationship_strength"]),
            common_topics=tuple(str(t) for t in data.get("common_topics", ())),
            last_meeting=data.get("last_meeting"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "meeting_count": self.meeting_count,
            "relationship_strength": self.relationship_strength,
            "common_topics": list(self.common_topics),
            "last_meeting": self.last_meeting,
        }


# ── Accountability ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CorruptionCase:
    """A reported corruption case.  ``country_code`` is filled in when flattened."""
    id: int | str
    status: str
    severity: str
    date_reported: str
    title: str = ""
    description: str = ""
    amount_involved: float = 0.0
    currency: str | None = None
    country_code: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CorruptionCase":
        return cls(
            id=data["id"],
            status=str(data["status"]),
            severity=str(data["severity"]),
            date_reported=str(data["date_reported"]),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            amount_involved=float(data.get("amount_involved", 0.0)),
            currency=data.get("currency"),
            country_code=data.get("country_code"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "country_code": self.country_code,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "severity": self.severity,
            "date_reported": self.date_reported,
            "amount_involved": self.amount_involved,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class GovernmentContract:
    """A public procurement contract.  ``country_code`` is filled in when flattened."""
    title: str
    status: str
    amount: float
    currency: str | None = None
    transparency_score: float | None = None
    id: int | str | None = None
    contractor: str | None = None
    date_awarded: str | None = None
    country_code: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GovernmentContract":
        return cls(
            title=str(data.get("title", "")),
            status=str(data["status"]),
            amount=float(data["amount"]),
            currency=data.get("currency"),
            transparency_score=_opt_float(data.get("transparency_score")),
            id=data.get("id"),
            contractor=data.get("contractor"),
            date_awarded=data.get("date_awarded"),
            country_code=data.get("country_code"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "country_code": self.country_code,
            "title": self.title,
            "contractor": self.contractor,
            "status": self.status,
            "amount": self.amount,
            "currency": self.currency,
            "transparency_score": self.transparency_score,
            "date_awarded": self.date_awarded,
        }
