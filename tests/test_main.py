"""CLI tests using typer's CliRunner."""

import json

from typer.testing import CliRunner

from solaudit import main
from solaudit.config import Config
from solaudit.context import SourceCollection
from solaudit.errors import NumericParseError
from solaudit.findings.models import Category, Outcome
from solaudit.main import EXIT_RULE_FAILURE, EXIT_USAGE, app
from solaudit.rules.base import Rule
from solaudit.rules.qa.private_vars_leading_underscore import PrivateVarsLeadingUnderscoreRule

runner = CliRunner()

CONTRACT = """
pragma solidity ^0.8.0;
contract Demo {
    event Moved(address src, address dst);
    uint256 private counter;
}
"""


def test_analyze_json(tmp_path):
    (tmp_path / "Demo.sol").write_text(CONTRACT)
    result = runner.invoke(app, ["analyze", str(tmp_path), "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    rule_ids = [r["rule_id"] for results in data["results"].values() for r in results]
    assert "event-indexing" in rule_ids
    optimization = {r["rule_id"]: r for r in data["results"]["optimization"]}
    findings = optimization["event-indexing"]["outcome"]["findings"]
    assert len(findings) == 1


def test_analyze_rich_output(tmp_path):
    (tmp_path / "Demo.sol").write_text(CONTRACT)
    result = runner.invoke(app, ["analyze", str(tmp_path), "--category", "qa"])
    assert result.exit_code == 0, result.output
    assert "private-vars-leading-underscore" in result.output
    assert "Summary" in result.output


def test_analyze_unknown_rule(tmp_path):
    (tmp_path / "Demo.sol").write_text(CONTRACT)
    result = runner.invoke(app, ["analyze", str(tmp_path), "--rule", "nope"])
    assert result.exit_code != 0


def test_analyze_parse_error(tmp_path):
    (tmp_path / "Broken.sol").write_text("contract Broken { function ( }")
    result = runner.invoke(app, ["analyze", str(tmp_path)])
    assert result.exit_code == EXIT_USAGE


def test_rules_listing():
    result = runner.invoke(app, ["rules"])
    assert result.exit_code == 0
    assert "event-indexing" in result.output
    assert "floating-pragma" in result.output


class BadLiteralRule(Rule):
    id = "bad-literal"
    name = "Fails on a literal"
    category = Category.OPTIMIZATION

    def find(self, sources: SourceCollection) -> Outcome:
        raise NumericParseError("0x", "bad literal")


def _use_failing_config(monkeypatch):
    def _select_rules(ids=None, categories=None, fail_fast=False):
        return Config(
            optimizations=[BadLiteralRule()],
            qa=[PrivateVarsLeadingUnderscoreRule()],
            fail_fast=fail_fast,
        )

    monkeypatch.setattr(main, "select_rules", _select_rules)


def test_analyze_fail_fast_aborts_on_rule_failure(tmp_path, monkeypatch):
    (tmp_path / "Demo.sol").write_text(CONTRACT)
    _use_failing_config(monkeypatch)
    result = runner.invoke(app, ["analyze", str(tmp_path), "--fail-fast"])
    assert result.exit_code == EXIT_RULE_FAILURE
    assert "Analysis aborted: rule bad-literal in category optimization failed because" in result.output
    assert "private-vars-leading-underscore" not in result.output


def test_analyze_isolated_reports_failure_and_findings(tmp_path, monkeypatch):
    (tmp_path / "Demo.sol").write_text(CONTRACT)
    _use_failing_config(monkeypatch)
    result = runner.invoke(app, ["analyze", str(tmp_path)])
    assert result.exit_code == EXIT_RULE_FAILURE
    assert "FAILED" in result.output
    assert "bad-literal" in result.output
    assert "private-vars-leading-underscore" in result.output
