"""Tests for utils/strings.py and utils/validation.py predicates."""

from datetime import date, datetime

import pytest

from utils.strings import contains_ci, normalize_code, parse_iso_date
from utils.validation import (
    ValidationResult,
    is_valid_amount,
    is_valid_transparency_score,
    is_valid_year,
)


class TestNormalizeCode:
    @pytest.mark.parametrize("raw,expected", [
        ("bw", "BW"), (" Bw ", "BW"), ("US", "US"), ("", ""), (None, ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_code(raw) == expected


class TestTextHelpers:
    def test_contains_ci(self):
        assert contains_ci("Diamond TRADE", "trade")
        assert not contains_ci("Energy", "trade")
        assert not contains_ci(None, "trade")


class TestParseIsoDate:
    @pytest.mark.parametrize("value,expected", [
        ("2024-03-14", date(2024, 3, 14)),
        ("2024-03-14T10:00:00Z", date(2024, 3, 14)),
        (" 2024-03-14 ", date(2024, 3, 14)),
        (date(2023, 1, 2), date(2023, 1, 2)),
        (datetime(2023, 1, 2, 15, 30), date(2023, 1, 2)),
    ])
    def test_valid(self, value, expected):
        assert parse_iso_date(value) == expected

    @pytest.mark.parametrize("value", ["2024-02-30", "14/03/2024", "soon", "", None, 20240314])
    def test_invalid(self, value):
        assert parse_iso_date(value) is None


class TestPredicates:
    def test_is_valid_year(self):
        assert is_valid_year(2024)
        assert not is_valid_year(24)
        assert not is_valid_year(True)
        assert not is_valid_year("2024")

    def test_is_valid_amount(self):
        assert is_valid_amount(0)
        assert is_valid_amount(12.5)
        assert not is_valid_amount(-1)
        assert not is_valid_amount(False)

    @pytest.mark.parametrize("score,ok", [(None, True), (0, True), (10.0, True),
                                          (7.5, True), (10.5, False), (-1, False)])
    def test_is_valid_transparency_score(self, score, ok):
        assert is_valid_transparency_score(score) is ok


class TestValidationResult:
    def test_exceeds_threshold(self):
        result = ValidationResult()
        result.add_issue("x", "warning", "careful")
        assert result.exceeds("info")
        assert result.exceeds("warning")
        assert not result.exceeds("error")

    def test_summary_counts(self):
        result = ValidationResult()
        result.add_issue("x", "error", "broken")
        result.mark_check_failed("x")
        result.mark_check_passed("y")
        data = result.to_dict()
        assert data["summary"]["errors"] == 1
        assert data["summary"]["total_checks"] == 2
        assert "Errors: 1" in result.summary_text()
