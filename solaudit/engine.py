"""
Rule orchestration: category modules and the per-run analysis engine.

An ``Engine`` owns the parsed sources and one ``CategoryModule`` per category
for a single run. Modules execute their rules strictly in order over the
shared, read-only SourceCollection. Two execution policies exist:

- fail-fast (``CategoryModule.run``): the first rule failure stops the module
  and is raised as a RuleError tagged with the rule and category;
- isolated (``CategoryModule.run_isolated``): every rule runs, each producing
  a success or failure RuleResult.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Sequence

from solaudit.context import SourceCollection, load_sources
from solaudit.errors import EngineError, RuleError
from solaudit.findings.models import AnalysisReport, Category, Outcome, RuleResult
from solaudit.rules.base import Rule

logger = logging.getLogger(__name__)


class CategoryModule:
    """Ordered rules of one category and the outcomes they produced in this run."""

    def __init__(self, category: Category, rules: Sequence[Rule] = ()) -> None:
        for rule in rules:
            if rule.category != category:
                raise ValueError(
                    f"rule {rule.id} belongs to {rule.category}, cannot run in the {category} module"
                )
        self.category = category
        self.rules: tuple[Rule, ...] = tuple(rules)
        self.outcomes: list[Outcome] = []
        self.results: list[RuleResult] = []

    def __len__(self) -> int:
        return len(self.rules)

    def _run_rule(self, rule: Rule, sources: SourceCollection) -> Outcome:
        started = time.perf_counter()
        try:
            outcome = rule.find(sources)
        except EngineError as e:
            logger.error("Rule %s (%s) failed: %s", rule.id, self.category, e)
            raise RuleError(rule.id, self.category.value, e) from e
        logger.debug(
            "Rule %s (%s): %d finding(s) in %d file(s), %.3fs",
            rule.id,
            self.category,
            outcome.finding_count,
            len(outcome.findings),
            time.perf_counter() - started,
        )
        return outcome

    def run(self, sources: SourceCollection) -> list[Outcome]:
        """
        Run every rule in order, stopping at the first failure.

        Returns:
            One Outcome per rule, in rule order.

        Raises:
            RuleError: a rule failed. ``self.outcomes`` keeps the outcomes of
            the rules that completed before it.
        """
        self.outcomes = []
        for rule in self.rules:
            self.outcomes.append(self._run_rule(rule, sources))
        return list(self.outcomes)

    def run_isolated(self, sources: SourceCollection) -> list[RuleResult]:
        """
        Run every rule in order, recording each as a success or a failure.

        A failing rule never prevents later rules from running, and always
        yields exactly one RuleResult per rule.
        """
        self.outcomes = []
        self.results = []
        for rule in self.rules:
            try:
                outcome = self._run_rule(rule, sources)
            except RuleError as e:
                result = RuleResult(
                    rule_id=rule.id,
                    category=self.category,
                    error_kind=e.error_kind,
                    error=str(e),
                )
            except Exception as e:
                logger.exception("Rule %s (%s) raised unexpectedly: %s", rule.id, self.category, e)
                result = RuleResult(
                    rule_id=rule.id,
                    category=self.category,
                    error_kind="internal",
                    error=str(RuleError(rule.id, self.category.value, e)),
                )
            else:
                self.outcomes.append(outcome)
                result = RuleResult(rule_id=rule.id, category=self.category, outcome=outcome)
            self.results.append(result)
        return list(self.results)


class Engine:
    """
    Analysis context for one run: the SourceCollection plus three category
    modules (vulnerability, optimization, qa), each present even when empty.
    """

    def __init__(
        self,
        sources: SourceCollection,
        vulnerabilities: Sequence[Rule] = (),
        optimizations: Sequence[Rule] = (),
        qa: Sequence[Rule] = (),
    ) -> None:
        self.sources = sources
        self.vulnerabilities = CategoryModule(Category.VULNERABILITY, vulnerabilities)
        self.optimizations = CategoryModule(Category.OPTIMIZATION, optimizations)
        self.qa = CategoryModule(Category.QUALITY, qa)

    @classmethod
    def from_path(
        cls,
        path: Path,
        vulnerabilities: Sequence[Rule] = (),
        optimizations: Sequence[Rule] = (),
        qa: Sequence[Rule] = (),
    ) -> "Engine":
        """Load and parse every source under ``path``, then build the engine."""
        return cls(load_sources(Path(path)), vulnerabilities, optimizations, qa)

    @property
    def modules(self) -> tuple[CategoryModule, CategoryModule, CategoryModule]:
        return self.vulnerabilities, self.optimizations, self.qa

    def run(self, fail_fast: bool = False) -> AnalysisReport:
        """
        Run all three modules over the shared sources.

        Args:
            fail_fast: Abort on the first rule failure (raising RuleError)
                instead of recording it and continuing.
        """
        logger.info(
            "Running %d rule(s) over %d file(s)",
            sum(len(module) for module in self.modules),
            len(self.sources),
        )
        report = AnalysisReport(sources=list(self.sources))
        for module in self.modules:
            if fail_fast:
                outcomes = module.run(self.sources)
                report.results[module.category] = [
                    RuleResult(rule_id=o.rule_id, category=module.category, outcome=o) for o in outcomes
                ]
            else:
                report.results[module.category] = module.run_isolated(self.sources)
        failures = report.failures()
        if failures:
            logger.warning("%d rule(s) failed during analysis", len(failures))
        logger.info("Analysis complete: %d finding(s)", report.finding_count)
        return report


def new_engine(
    path: Path | str,
    vulnerability_rules: Optional[Sequence[Rule]] = None,
    optimization_rules: Optional[Sequence[Rule]] = None,
    qa_rules: Optional[Sequence[Rule]] = None,
) -> Engine:
    """Build an Engine for ``path`` running exactly the given rules per category."""
    return Engine.from_path(
        Path(path),
        vulnerability_rules or (),
        optimization_rules or (),
        qa_rules or (),
    )
