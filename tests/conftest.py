"""
Pytest fixtures for the transparency API tests.

Provides a small, deterministic fixture directory written into tmp_path, the
FixtureStore loaded from it, and a TestClient wired to it through
create_app().  The dataset is chosen so the documented scenarios have exact
expected answers:

- BW budget history covers 2020-2024, stored ascending.
- BW breakdowns are filed 2022, 2021, 2023 (out of order on purpose).
- DE has no education history and no breakdowns (dataset-level 404s).
- BW corruption cases include two resolved/high cases on different dates.
"""

import copy
import json
from pathlib import Path

import pytest

from utils.fixtures import load_fixture_store


def _point(year, value, currency=None):
    point = {"year": year, "value": value, "source": "Test Source",
             "timestamp": f"{year}-06-30T00:00:00Z"}
    if currency:
        point["currency"] = currency
    return point


SAMPLE_FIXTURES = {
    "countries.json": [
        {"code": "BW", "name": "Botswana", "budget": 62000000000, "cpi": 59,
         "health_exp": 480.5, "education_exp": 610.0, "currency": "BWD", "region": "Africa"},
        {"code": "US", "name": "United States", "budget": 6750000000000, "cpi": 69,
         "health_exp": 12555.0, "education_exp": 3640.0, "currency": "USD",
         "region": "North America"},
        {"code": "DE", "name": "Germany", "budget": 476800000000, "cpi": 78,
         "health_exp": 6180.0, "education_exp": None, "currency": "EUR", "region": "Europe"},
        {"code": "ZA", "name": "South Africa", "budget": 2370000000000, "cpi": 41,
         "currency": "ZAR", "region": "Africa"},
    ],
    "budget_history.json": {
        "BW": [_point(y, v, "BWD") for y, v in
               [(2020, 52e9), (2021, 55e9), (2022, 58e9), (2023, 61e9), (2024, 62e9)]],
        "US": [_point(2023, 6.13e12, "USD"), _point(2024, 6.75e12, "USD")],
        "DE": [_point(2024, 4.768e11, "EUR")],
    },
    "cpi_history.json": {
        "BW": [_point(2022, 60), _point(2023, 59), _point(2024, 59)],
        "US": [_point(2024, 69)],
        "DE": [_point(2024, 78)],
    },
    "health_history.json": {
        "BW": [_point(2023, 466.2, "BWD"), _point(2024, 480.5, "BWD")],
        "DE": [_point(2024, 6180.0, "EUR")],
    },
    "education_history.json": {
        "BW": [_point(2023, 597.4, "BWD"), _point(2024, 610.0, "BWD")],
    },
    "budget_breakdowns.json": {
        "BW": {
            "2022": {"year": 2022, "sectors": {"health": 4.6e9, "education": 9.3e9,
                                               "other": 44.1e9}, "total": 58e9},
            "2021": {"year": 2021, "sectors": {"health": 4.2e9, "education": 8.9e9,
                                               "other": 41.9e9}, "total": 55e9},
            "2023": {"year": 2023, "sectors": {"health": 5.1e9, "education": 9.8e9,
                                               "other": 46.1e9}, "total": 61e9},
        },
    },
    "meetings.json": [
        {"id": 1, "date": "2023-03-14", "countries": ["BW", "US"], "type": "bilateral",
         "topic": "Trade and investment", "leaders": ["Leader BW", "Leader US"]},
        {"id": 2, "date": "2023-08-23", "countries": ["ZA", "BW", "US"], "type": "multilateral",
         "topic": "Climate finance", "leaders": ["Leader ZA", "Leader BW", "Leader US"]},
        {"id": 3, "date": "2024-01-17", "countries": ["DE", "US"], "type": "bilateral",
         "topic": "Energy", "leaders": ["Leader DE", "Leader US"]},
        {"id": 4, "date": "2024-09-10", "countries": ["BW", "ZA"], "type": "bilateral",
         "topic": "Diamond TRADE", "leaders": ["Leader BW", "Leader ZA"]},
    ],
    "relationships.json": {
        "BW-US": {"meeting_count": 2, "relationship_strength": 0.78,
                  "common_topics": ["trade", "climate"], "last_meeting": "2023-08-23"},
        "BW-ZA": {"meeting_count": 2, "relationship_strength": 0.85,
                  "common_topics": ["climate", "trade"], "last_meeting": "2024-09-10"},
        "DE-US": {"meeting_count": 1, "relationship_strength": 0.83,
                  "common_topics": ["energy"], "last_meeting": "2024-01-17"},
    },
    "corruption_cases.json": {
        "BW": [
            {"id": 101, "title": "Roads kickbacks", "status": "ongoing", "severity": "high",
             "date_reported": "2024-04-18", "amount_involved": 12500000, "currency": "BWD"},
            {"id": 102, "title": "Fund misuse", "status": "resolved", "severity": "critical",
             "date_reported": "2021-07-02", "amount_involved": 250000000, "currency": "BWD"},
            {"id": 103, "title": "Equipment overpricing", "status": "resolved", "severity": "high",
             "date_reported": "2021-03-10", "amount_involved": 31600000, "currency": "BWD"},
            {"id": 104, "title": "Licensing bribery", "status": "closed", "severity": "low",
             "date_reported": "2023-02-15", "amount_involved": 180000, "currency": "BWD"},
            {"id": 105, "title": "Hospital tender", "status": "resolved", "severity": "high",
             "date_reported": "2023-08-02", "amount_involved": 4000000, "currency": "BWD"},
        ],
        "ZA": [
            {"id": 201, "title": "Water tender fraud", "status": "ongoing", "severity": "medium",
             "date_reported": "2024-02-05", "amount_involved": 42000000, "currency": "ZAR"},
            {"id": 202, "title": "PPE procurement", "status": "resolved", "severity": "high",
             "date_reported": "2020-09-01", "amount_involved": 14300000000, "currency": "ZAR"},
        ],
    },
    "contracts.json": {
        "BW": [
            {"id": "BW-1", "title": "Road upgrade", "status": "ongoing", "amount": 45000000,
             "currency": "BWD", "transparency_score": 7.5},
            {"id": "BW-2", "title": "Clinic solar power", "status": "completed", "amount": 8200000,
             "currency": "BWD", "transparency_score": 8.9},
            {"id": "BW-3", "title": "Water pipeline", "status": "cancelled", "amount": 120000000,
             "currency": "BWD", "transparency_score": 3.4},
            {"id": "BW-4", "title": "ID system", "status": "ongoing", "amount": 3100000,
             "currency": "BWD"},
        ],
        "US": [
            {"id": "US-1", "title": "Bridge repair", "status": "completed", "amount": 60000000,
             "currency": "USD", "transparency_score": 9.0},
        ],
    },
}


def write_fixtures(directory: Path, overrides: dict | None = None) -> Path:
    """Write SAMPLE_FIXTURES (with per-file overrides) as JSON into *directory*.

    An override value of None removes that file from the directory.
    """
    directory.mkdir(parents=True, exist_ok=True)
    files = copy.deepcopy(SAMPLE_FIXTURES)
    files.update(overrides or {})
    for name, content in files.items():
        if content is None:
            continue
        (directory / name).write_text(json.dumps(content), encoding="utf-8")
    return directory


@pytest.fixture()
def fixtures_dir(tmp_path):
    """A fixture directory holding the sample dataset."""
    return write_fixtures(tmp_path / "fixtures")


@pytest.fixture()
def make_fixtures_dir(tmp_path):
    """Factory: write the sample dataset with overrides into a fresh directory."""
    counter = {"n": 0}

    def _make(overrides: dict | None = None) -> Path:
        counter["n"] += 1
        return write_fixtures(tmp_path / f"fixtures_{counter['n']}", overrides)

    return _make


@pytest.fixture()
def store(fixtures_dir):
    """The FixtureStore loaded from the sample dataset."""
    return load_fixture_store(fixtures_dir)


@pytest.fixture()
def client(fixtures_dir):
    """A TestClient for an app serving the sample dataset."""
    from fastapi.testclient import TestClient

    from api.app import create_app

    app = create_app(fixtures_dir=fixtures_dir)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
