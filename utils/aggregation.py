"""Cross-country flattening and per-country roll-ups.

``flatten_with_country_tag`` turns the per-country mappings held by the
fixture store into one list whose records carry their ``country_code``.
The summaries mirror the tallies the dashboard's tracker panels display.
"""

from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Any, Iterable, Mapping, Sequence, TypeVar

from utils.config import KnownValues
from utils.records import CorruptionCase, GovernmentContract

T = TypeVar("T", CorruptionCase, GovernmentContract)


def flatten_with_country_tag(by_country: Mapping[str, Sequence[T]]) -> list[T]:
    """Concatenate per-country records, tagging each with its country code.

    Records are emitted in the mapping's key order; callers apply the
    entity sort afterwards.
    """
    out: list[T] = []
    for code, records in by_country.items():
        out.extend(dataclasses.replace(r, country_code=code) for r in records)
    return out


def summarize_corruption_cases(cases: Iterable[CorruptionCase]) -> dict[str, Any]:
    """Count cases by severity and status and total the amounts involved.

    ``by_severity`` always lists the four known severities (least severe
    first), with zero counts where absent; unknown severities are appended.
    """
    cases = list(cases)
    severity_counts = Counter(c.severity for c in cases)
    by_severity = {s: severity_counts.pop(s, 0) for s in KnownValues.CASE_SEVERITIES}
    by_severity.update(sorted(severity_counts.items()))
    return {
        "total_cases": len(cases),
        "total_amount_involved": sum(c.amount_involved for c in cases),
        "by_severity": by_severity,
        "by_status": dict(sorted(Counter(c.status for c in cases).items())),
    }


def summarize_contracts(contracts: Iterable[GovernmentContract]) -> dict[str, Any]:
    """Total contract value, average transparency score and counts by status.

    The average covers only contracts that publish a score; it is ``None``
    when none do.
    """
    contracts = list(contracts)
    scores = [c.transparency_score for c in contracts if c.transparency_score is not None]
    return {
        "total_contracts": len(contracts),
        "total_amount": sum(c.amount for c in contracts),
        "average_transparency_score": round(sum(scores) / len(scores), 2) if scores else None,
        "by_status": dict(sorted(Counter(c.status for c in contracts).items())),
    }
