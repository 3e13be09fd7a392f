"""Tests for the finding/outcome data models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from solaudit.findings.models import AnalysisReport, Category, Finding, Location, Outcome, RuleResult


def _finding(path: str, line: int) -> Finding:
    return Finding(
        rule_id="demo",
        message="demo finding",
        location=Location(
            path=Path(path), line=line, column=1, end_line=line, end_column=10, start_byte=0, end_byte=9
        ),
        snippet="uint256 x;",
    )


def test_push_or_insert_groups_by_file_in_order():
    outcome = Outcome(rule_id="demo", category=Category.QUALITY)
    outcome.push_or_insert(_finding("b.sol", 3))
    outcome.push_or_insert(_finding("a.sol", 1))
    outcome.push_or_insert(_finding("b.sol", 7))
    assert outcome.paths == [Path("b.sol"), Path("a.sol")]
    assert [f.location.line for f in outcome.findings[Path("b.sol")]] == [3, 7]
    assert outcome.finding_count == 3


def test_report_helpers():
    ok = Outcome(rule_id="ok", category=Category.VULNERABILITY)
    ok.push_or_insert(_finding("a.sol", 1))
    report = AnalysisReport(
        sources=[Path("a.sol")],
        results={
            Category.VULNERABILITY: [
                RuleResult(rule_id="ok", category=Category.VULNERABILITY, outcome=ok),
                RuleResult(rule_id="bad", category=Category.VULNERABILITY, error_kind="pattern", error="boom"),
            ],
            Category.OPTIMIZATION: [],
        },
    )
    assert report.finding_count == 1
    assert [r.rule_id for r in report.failures()] == ["bad"]
    assert report.outcomes(Category.OPTIMIZATION) == []
    assert report.outcomes(Category.VULNERABILITY) == [ok]
    assert '"bad"' in report.model_dump_json()


def test_category_str():
    assert str(Category.QUALITY) == "qa"


def test_rule_result_needs_outcome_or_error():
    outcome = Outcome(rule_id="demo", category=Category.QUALITY)
    with pytest.raises(ValidationError):
        RuleResult(rule_id="demo", category=Category.QUALITY)
    with pytest.raises(ValidationError):
        RuleResult(
            rule_id="demo", category=Category.QUALITY, outcome=outcome, error_kind="pattern", error="boom"
        )
    with pytest.raises(ValidationError):
        RuleResult(rule_id="demo", category=Category.QUALITY, error="boom")
    assert RuleResult(rule_id="demo", category=Category.QUALITY, outcome=outcome).ok
