from __future__ import annotations

"""
Typer CLI entry point for solaudit.

- ``analyze`` loads a .sol file or a directory of contracts, runs the selected
  rules through the Engine and prints a rich report (or JSON with --json)
- ``rules`` lists every registered rule
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from solaudit.config import RULE_REGISTRY, select_rules
from solaudit.engine import Engine
from solaudit.errors import RuleError, SourceLoadError
from solaudit.findings.models import Category
from solaudit.reporting.console import print_report

logger = logging.getLogger(__name__)

app = typer.Typer(help="solaudit - static analysis for Solidity smart contracts.")

EXIT_USAGE = 1
EXIT_RULE_FAILURE = 2


@app.command()
def analyze(
    target: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        resolve_path=True,
        help="Solidity file or directory to analyze.",
    ),
    category: Optional[List[Category]] = typer.Option(
        None, "--category", "-c", help="Only run rules of this category (repeatable)."
    ),
    rule: Optional[List[str]] = typer.Option(
        None, "--rule", "-r", help="Only run the rule with this id (repeatable)."
    ),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Abort on the first rule failure."),
    json_output: bool = typer.Option(False, "--json", help="Print the report as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and full messages."),
) -> None:
    """Analyze a Solidity file or every .sol file under a directory."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = select_rules(ids=rule, categories=category, fail_fast=fail_fast)
    except KeyError as e:
        raise typer.BadParameter(str(e.args[0]), param_hint="--rule")

    if not config.rule_count:
        typer.echo("No rules selected.")
        raise typer.Exit(code=EXIT_USAGE)

    try:
        engine = Engine.from_path(target, config.vulnerabilities, config.optimizations, config.qa)
    except SourceLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    try:
        report = engine.run(fail_fast=config.fail_fast)
    except RuleError as e:
        typer.echo(f"Analysis aborted: {e}", err=True)
        raise typer.Exit(code=EXIT_RULE_FAILURE)

    if json_output:
        typer.echo(report.model_dump_json(indent=2))
    else:
        root = target if target.is_dir() else target.parent
        print_report(report, root=root, verbose=verbose)

    if report.failures():
        raise typer.Exit(code=EXIT_RULE_FAILURE)


@app.command("rules")
def list_rules() -> None:
    """List every available rule."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Id")
    table.add_column("Category")
    table.add_column("Severity")
    table.add_column("Name")
    for rule_id, rule_cls in RULE_REGISTRY.items():
        table.add_row(rule_id, rule_cls.category.value, rule_cls.severity, rule_cls.name)
    Console().print(table)


def main() -> None:
    """Entry point for `python -m solaudit.main`."""
    app()


if __name__ == "__main__":
    main()
