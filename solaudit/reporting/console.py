# Rich console output: render an AnalysisReport grouped by category, rule and file.

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from solaudit.findings.models import AnalysisReport, Category, Outcome

CATEGORY_TITLES = {
    Category.VULNERABILITY: "Vulnerabilities",
    Category.OPTIMIZATION: "Gas Optimizations",
    Category.QUALITY: "Quality Assurance",
}

# Severity → Rich style
SEVERITY_STYLE = {
    "high": "bold red",
    "medium": "bold yellow",
    "low": "bold blue",
    "gas": "bold green",
    "info": "bold dim",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_style(severity: str) -> str:
    return SEVERITY_STYLE.get(severity.lower(), DEFAULT_SEVERITY_STYLE)


def _shorten_path(path: Path, root: Optional[Path]) -> str:
    if root is not None:
        try:
            return str(path.relative_to(root))
        except ValueError:
            pass
    return str(path)


def _print_outcome(outcome: Outcome, console: Console, root: Optional[Path], verbose: bool) -> None:
    table = Table(
        title=escape(f"[{outcome.rule_id}] {outcome.finding_count} instance(s)"),
        title_justify="left",
        show_header=True,
        header_style="bold magenta",
        box=box.SIMPLE,
        padding=(0, 1),
    )
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right", style="dim", width=5)
    table.add_column("Severity", width=8)
    table.add_column("Message" if verbose else "Snippet", style="white")

    for path, findings in outcome.findings.items():
        for f in findings:
            detail = f.message if verbose else f.snippet.strip().splitlines()[0]
            table.add_row(
                Text(_shorten_path(path, root)),
                str(f.location.line),
                Text(f.severity.upper(), style=_severity_style(f.severity)),
                Text(detail),
            )
    console.print(table)


def print_report(
    report: AnalysisReport,
    root: Optional[Path] = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> None:
    """
    Print a report with one section per category. Rules without findings are
    skipped; failed rules are listed at the end.
    """
    console = console or Console()

    for category, results in report.results.items():
        outcomes = [r.outcome for r in results if r.outcome is not None and r.outcome.finding_count]
        if not outcomes:
            continue
        console.print()
        console.print(Panel(
            f"[bold cyan]{CATEGORY_TITLES.get(category, str(category))}[/bold cyan]",
            box=box.SIMPLE_HEAD,
            border_style="blue",
            padding=(0, 1),
        ))
        for outcome in outcomes:
            _print_outcome(outcome, console, root, verbose)

    failures = report.failures()
    if failures:
        console.print()
        for result in failures:
            console.print(
                "[bold red]FAILED[/bold red] " + escape(f"[{result.rule_id}] ({result.error_kind}) {result.error}")
            )

    total = report.finding_count
    console.print()
    console.print(
        Panel(
            f"[bold]{total} finding{'s' if total != 1 else ''}[/bold] in {len(report.sources)} file(s)"
            + (f" | [bold red]{len(failures)} rule failure(s)[/bold red]" if failures else ""),
            title="Summary",
            border_style="yellow" if total or failures else "green",
            box=box.ROUNDED,
        )
    )
