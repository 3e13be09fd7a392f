# Pydantic data models for analysis results: Location, Finding, Outcome, RuleResult, AnalysisReport.

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class Category(str, Enum):
    """Classification a rule belongs to."""

    VULNERABILITY = "vulnerability"
    OPTIMIZATION = "optimization"
    QUALITY = "qa"

    def __str__(self) -> str:
        return self.value


class Location(BaseModel):
    """Where in the source a finding was reported (file, start/end position, byte span)."""

    path: Path
    line: int = Field(..., ge=1, description="1-based line number")
    column: int = Field(..., ge=1, description="1-based column number")
    end_line: int = Field(..., ge=1)
    end_column: int = Field(..., ge=1)
    start_byte: int = Field(..., ge=0)
    end_byte: int = Field(..., ge=0)


class Finding(BaseModel):
    """One flagged occurrence: the construct's location and its exact source text."""

    rule_id: str
    message: str
    location: Location
    snippet: str
    severity: str = Field(default="warning", description="e.g. high, medium, low, gas, info")

    @property
    def path(self) -> Path:
        return self.location.path


class Outcome(BaseModel):
    """
    Complete result of one rule over a source collection.

    ``findings`` maps file path to that file's findings in declaration order.
    Only files with at least one match appear; dict insertion order follows the
    order files were visited.
    """

    rule_id: str
    category: Category
    findings: dict[Path, list[Finding]] = Field(default_factory=dict)

    def push_or_insert(self, finding: Finding) -> None:
        self.findings.setdefault(finding.path, []).append(finding)

    @property
    def paths(self) -> list[Path]:
        return list(self.findings)

    @property
    def finding_count(self) -> int:
        return sum(len(items) for items in self.findings.values())

    def all_findings(self) -> list[Finding]:
        return [finding for items in self.findings.values() for finding in items]


class RuleResult(BaseModel):
    """Success (with an Outcome) or failure (with its cause) of a single rule."""

    rule_id: str
    category: Category
    outcome: Optional[Outcome] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_outcome_or_error(self) -> "RuleResult":
        failed = self.error is not None or self.error_kind is not None
        if self.outcome is not None and failed:
            raise ValueError("a rule result carries either an outcome or an error, not both")
        if self.outcome is None and (self.error is None or self.error_kind is None):
            raise ValueError("a failed rule result needs both error_kind and error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class AnalysisReport(BaseModel):
    """Per-category rule results of one analysis run, in execution order."""

    sources: list[Path] = Field(default_factory=list)
    results: dict[Category, list[RuleResult]] = Field(default_factory=dict)

    def outcomes(self, category: Optional[Category] = None) -> list[Outcome]:
        """Successful outcomes, optionally restricted to one category."""
        selected = []
        for cat, results in self.results.items():
            if category is not None and cat != category:
                continue
            selected.extend(r.outcome for r in results if r.outcome is not None)
        return selected

    def failures(self) -> list[RuleResult]:
        return [r for results in self.results.values() for r in results if not r.ok]

    @property
    def finding_count(self) -> int:
        return sum(outcome.finding_count for outcome in self.outcomes())
