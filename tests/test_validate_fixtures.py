"""
Tests for validate_fixtures.py: the fixture consistency checks and CLI.
"""

import json

import pytest

import validate_fixtures as vf
from utils.fixtures import load_fixture_store


def _store(make_fixtures_dir, overrides):
    return load_fixture_store(make_fixtures_dir(overrides))


def _severities(issues):
    return [i.severity for i in issues]


class TestCleanFixtures:
    def test_sample_dataset_passes_every_check(self, store):
        result = vf.run_checks(store)
        assert result.issues == []
        assert len(result.passed_checks) == len(vf.ALL_CHECKS)

    def test_registry_holds_every_check(self):
        registry = vf.build_registry()
        assert list(registry.checks) == [name for name, _ in vf.ALL_CHECKS]


class TestCountryCodes:
    def test_duplicate_code(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"countries.json": [
            {"code": "BW", "name": "Botswana"}, {"code": "BW", "name": "Botswana again"}]})
        issues = vf.check_country_codes(store)
        assert _severities(issues) == ["error"]
        assert "Duplicate" in issues[0].detail

    def test_lowercase_code(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"countries.json": [{"code": "bw", "name": "Botswana"}]})
        issues = vf.check_country_codes(store)
        assert len(issues) == 1
        assert issues[0].sample == "bw"


class TestMetricHistories:
    def test_unsorted_series_warns_about_current_value(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"cpi_history.json": {"BW": [
            {"year": 2024, "value": 59}, {"year": 2022, "value": 60}]}})
        issues = vf.check_metric_histories(store)
        assert _severities(issues) == ["warning"]
        assert "current value would be 2022" in issues[0].detail

    def test_duplicate_year(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"cpi_history.json": {"BW": [
            {"year": 2023, "value": 59}, {"year": 2023, "value": 60}]}})
        assert "error" in _severities(vf.check_metric_histories(store))

    def test_implausible_year(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"cpi_history.json": {"BW": [{"year": 24, "value": 59}]}})
        issues = vf.check_metric_histories(store)
        assert any("implausible" in i.detail for i in issues)


class TestOrphanSeries:
    def test_series_for_unknown_country(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"cpi_history.json": {"XX": [{"year": 2024, "value": 1}]}})
        issues = vf.check_orphan_series(store)
        assert _severities(issues) == ["warning"]
        assert issues[0].sample == ["XX"]

    def test_relationship_with_unknown_country(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"relationships.json": {
            "BW-FR": {"meeting_count": 1, "relationship_strength": 0.5}}})
        issues = vf.check_orphan_series(store)
        assert _severities(issues) == ["info"]


class TestBreakdownTotals:
    def test_total_far_from_sector_sum(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"budget_breakdowns.json": {"BW": {
            "2023": {"sectors": {"health": 5e9, "education": 10e9}, "total": 61e9}}}})
        issues = vf.check_breakdown_totals(store)
        assert _severities(issues) == ["warning"]
        assert "BW 2023" in issues[0].detail

    def test_within_tolerance(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"budget_breakdowns.json": {"BW": {
            "2023": {"sectors": {"health": 50.0, "other": 49.5}, "total": 100.0}}}})
        assert vf.check_breakdown_totals(store) == []

    def test_year_mismatch(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"budget_breakdowns.json": {"BW": {
            "2023": {"year": 2022, "sectors": {"health": 1.0}, "total": 1.0}}}})
        assert "error" in _severities(vf.check_breakdown_totals(store))


class TestMeetings:
    def test_bad_meeting(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"meetings.json": [
            {"id": 1, "date": "soon", "countries": ["BW"], "type": "summit", "topic": "x"}]})
        details = " ".join(i.detail for i in vf.check_meetings(store))
        assert "fewer than two countries" in details
        assert "unknown type" in details
        assert "not YYYY-MM-DD" in details

    def test_duplicate_id(self, make_fixtures_dir):
        meeting = {"id": 7, "date": "2024-01-01", "countries": ["BW", "US"],
                   "type": "bilateral", "topic": "x"}
        store = _store(make_fixtures_dir, {"meetings.json": [meeting, meeting]})
        issues = vf.check_meetings(store)
        assert issues[0].count == 2


class TestCasesAndContracts:
    def test_bad_corruption_case(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"corruption_cases.json": {"BW": [
            {"id": 1, "status": "pending", "severity": "extreme", "date_reported": "n/a",
             "amount_involved": -5}]}})
        assert len(vf.check_corruption_cases(store)) == 4

    def test_transparency_score_out_of_range(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"contracts.json": {"BW": [
            {"id": "X", "title": "t", "status": "ongoing", "amount": 1, "transparency_score": 11}]}})
        issues = vf.check_contracts(store)
        assert _severities(issues) == ["error"]
        assert "0-10" in issues[0].detail

    def test_unknown_contract_status(self, make_fixtures_dir):
        store = _store(make_fixtures_dir, {"contracts.json": {"BW": [
            {"title": "t", "status": "paused", "amount": 1}]}})
        assert _severities(vf.check_contracts(store)) == ["warning"]


class TestCli:
    def test_clean_exit_zero(self, fixtures_dir, capsys):
        assert vf.main(["--fixtures", str(fixtures_dir)]) == 0
        assert "ALL CHECKS PASSED" in capsys.readouterr().out

    def test_json_output(self, fixtures_dir, capsys):
        assert vf.main(["--fixtures", str(fixtures_dir), "--json"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["summary"]["errors"] == 0
        assert report["fixtures"]["countries"] == 4
        assert len(report["fingerprint"]) == 16

    @pytest.mark.parametrize("threshold,expected", [("error", 0), ("warning", 1)])
    def test_threshold(self, make_fixtures_dir, capsys, threshold, expected):
        fixtures = make_fixtures_dir({"cpi_history.json": {"XX": [{"year": 2024, "value": 1}]}})
        assert vf.main(["--fixtures", str(fixtures), "--threshold", threshold]) == expected

    def test_verbose_lists_issue_details(self, make_fixtures_dir, capsys):
        fixtures = make_fixtures_dir({"cpi_history.json": {"XX": [{"year": 2024, "value": 1}]}})
        vf.main(["--fixtures", str(fixtures), "--verbose"])
        out = capsys.readouterr().out
        assert "[WARN] orphan_series" in out
        assert "[WARNING]" in out

    def test_report_ends_with_summary_counts(self, make_fixtures_dir, capsys):
        fixtures = make_fixtures_dir({"cpi_history.json": {"XX": [{"year": 2024, "value": 1}]}})
        vf.main(["--fixtures", str(fixtures)])
        out = capsys.readouterr().out
        assert "Validation Summary:" in out
        assert "Failed Checks: 0" not in out
        assert "- Errors: 0" in out

    def test_skip_check(self, make_fixtures_dir, capsys):
        fixtures = make_fixtures_dir({"cpi_history.json": {"XX": [{"year": 2024, "value": 1}]}})
        code = vf.main(["--fixtures", str(fixtures), "--threshold", "warning",
                        "--skip", "orphan_series"])
        assert code == 0

    def test_unloadable_fixtures_exit_two(self, tmp_path, capsys):
        assert vf.main(["--fixtures", str(tmp_path / "missing")]) == 2
        assert "Error:" in capsys.readouterr().err
