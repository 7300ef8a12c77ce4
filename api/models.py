"""
Pydantic response models for the API.

Optional fields default to None so records with missing fixture fields
still validate.  Field() descriptions and examples feed the OpenAPI docs.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ── Countries and metrics ─────────────────────────────────────────────────────

class CountrySummaryOut(BaseModel):
    """Code and name only, as listed by GET /countries."""
    code: str = Field(..., description="Uppercase country code", examples=["BW"])
    name: str = Field(..., description="Country name", examples=["Botswana"])


class CountryOut(CountrySummaryOut):
    """A country with its current-year scalar metrics."""
    budget: float | None = Field(None, description="Current national budget", examples=[6.2e10])
    cpi: float | None = Field(None, description="Current Corruption Perception Index score (0-100)", examples=[59])
    health_exp: float | None = Field(None, description="Health expenditure per capita", examples=[480.5])
    education_exp: float | None = Field(None, description="Education expenditure per capita", examples=[610.0])
    currency: str | None = Field(None, description="Currency of monetary values", examples=["BWD"])
    region: str | None = Field(None, description="World region", examples=["Africa"])


class MetricPointOut(BaseModel):
    """One year of a metric series."""
    year: int = Field(..., description="Data year", examples=[2024])
    value: float = Field(..., description="Metric value for the year", examples=[62000000000])
    currency: str | None = Field(None, description="Currency, for monetary metrics", examples=["BWD"])
    source: str | None = Field(None, description="Publishing source", examples=["Ministry of Finance"])
    timestamp: str | None = Field(None, description="When the value was collected (ISO-8601)")


class BudgetBreakdownOut(BaseModel):
    """Sector decomposition of one year's budget."""
    year: int = Field(..., description="Budget year", examples=[2023])
    sectors: dict[str, float] = Field(..., description="Amount per sector", examples=[{"health": 5.1e9, "education": 9.8e9}])
    total: float = Field(..., description="Published total (not recomputed from sectors)", examples=[6.1e10])


# ── Diplomacy ─────────────────────────────────────────────────────────────────

class MeetingOut(BaseModel):
    """A meeting between country leaders."""
    id: int | str = Field(..., description="Meeting identifier", examples=[1])
    date: str = Field(..., description="Meeting date (ISO-8601)", examples=["2024-03-14"])
    countries: list[str] = Field(..., description="Codes of participating countries", examples=[["BW", "US"]])
    type: str = Field(..., description="bilateral | multilateral", examples=["bilateral"])
    topic: str = Field(..., description="Main topic", examples=["Trade and investment"])
    leaders: list[str] = Field(default_factory=list, description="Attending leaders")
    location: str | None = Field(None, description="Where the meeting took place", examples=["Gaborone"])


class RelationshipOut(BaseModel):
    """Meeting statistics for one country pair."""
    meeting_count: int = Field(..., description="Number of recorded meetings", examples=[4])
    relationship_strength: float = Field(..., description="Strength score (0-1)", examples=[0.72])
    common_topics: list[str] = Field(default_factory=list, description="Recurring topics")
    last_meeting: str | None = Field(None, description="Date of the most recent meeting", examples=["2024-03-14"])


# ── Accountability ────────────────────────────────────────────────────────────

class CorruptionCaseOut(BaseModel):
    """A reported corruption case."""
    id: int | str = Field(..., description="Case identifier", examples=[101])
    country_code: str | None = Field(None, description="Country the case belongs to", examples=["BW"])
    title: str = Field("", description="Short case title")
    description: str = Field("", description="Case description")
    status: str = Field(..., description="ongoing | resolved | closed", examples=["ongoing"])
    severity: str = Field(..., description="low | medium | high | critical", examples=["high"])
    date_reported: str = Field(..., description="Date the case was reported (ISO-8601)", examples=["2023-08-02"])
    amount_involved: float = Field(0.0, description="Amount involved", examples=[12500000])
    currency: str | None = Field(None, description="Currency of amount_involved", examples=["BWD"])


class ContractOut(BaseModel):
    """A government procurement contract."""
    id: int | str | None = Field(None, description="Contract identifier")
    country_code: str | None = Field(None, description="Awarding country", examples=["BW"])
    title: str = Field("", description="Contract title")
    contractor: str | None = Field(None, description="Awarded contractor")
    status: str = Field(..., description="ongoing | completed | cancelled", examples=["ongoing"])
    amount: float = Field(..., description="Contract value", examples=[45000000])
    currency: str | None = Field(None, description="Currency of amount", examples=["BWD"])
    transparency_score: float | None = Field(None, description="Transparency score (0-10)", examples=[7.5])
    date_awarded: str | None = Field(None, description="Award date (ISO-8601)")


class CorruptionSummaryOut(BaseModel):
    """Roll-up of a country's corruption cases."""
    total_cases: int = Field(..., examples=[5])
    total_amount_involved: float = Field(..., examples=[48200000])
    by_severity: dict[str, int] = Field(..., description="Case count per severity, least severe first")
    by_status: dict[str, int] = Field(..., description="Case count per status")


class ContractSummaryOut(BaseModel):
    """Roll-up of a country's government contracts."""
    total_contracts: int = Field(..., examples=[4])
    total_amount: float = Field(..., examples=[310000000])
    average_transparency_score: float | None = Field(None, description="Mean of published scores", examples=[6.8])
    by_status: dict[str, int] = Field(..., description="Contract count per status")


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error message", examples=["Country not found"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[404])
