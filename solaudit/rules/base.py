# Rule interface (abstract base class): defines the contract all detection rules implement.
# Concrete rules live under rules/vulnerabilities, rules/optimizations and rules/qa.

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Iterable

from tree_sitter import Node as TSNode

from solaudit.context import SourceCollection, SourceFile, get_end_line_col, get_line_col, get_source_span
from solaudit.errors import PatternError
from solaudit.extractors import ConstructKind, extract
from solaudit.findings.models import Category, Finding, Location, Outcome


def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern:
    """
    Compile a rule's regular expression.

    Raises:
        PatternError: the pattern is invalid.
    """
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


class Rule(ABC):
    """
    Abstract base class for all detection rules.

    Subclasses must define:
    - id: str — unique rule identifier (e.g. "event-indexing")
    - name: str — human-readable rule name
    - category: Category — vulnerability, optimization or qa
    - find(sources) -> Outcome — analyze every file and return one Outcome

    Rules are stateless between runs and must not depend on other rules.
    """

    id: str
    name: str
    category: Category
    severity: str = "warning"
    description: str = ""

    @abstractmethod
    def find(self, sources: SourceCollection) -> Outcome:
        """
        Run the rule over the whole source collection.

        Returns:
            The complete Outcome. Files without matches have no entry.

        Raises:
            EngineError subclasses (ExtractionError, PatternError,
            NumericParseError). A failing rule never returns a partial Outcome.
        """
        ...

    def new_outcome(self) -> Outcome:
        return Outcome(rule_id=self.id, category=self.category)

    def message_for(self, source_file: SourceFile, node: TSNode) -> str:
        return self.name

    def make_finding(self, source_file: SourceFile, node: TSNode) -> Finding:
        line, col = get_line_col(node)
        end_line, end_col = get_end_line_col(node)
        return Finding(
            rule_id=self.id,
            message=self.message_for(source_file, node),
            location=Location(
                path=source_file.path,
                line=line,
                column=col,
                end_line=end_line,
                end_column=end_col,
                start_byte=node.start_byte,
                end_byte=node.end_byte,
            ),
            snippet=get_source_span(source_file, node),
            severity=self.severity,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class NodeRule(Rule):
    """
    Rule over one construct kind: extract ``kind`` from every file, test each
    node with is_match(), emit a Finding per match.

    Override flagged_nodes() when the finding should point at a different node
    than the one extracted (or at several).
    """

    kind: ConstructKind

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        return False

    def flagged_nodes(self, node: TSNode, source_file: SourceFile) -> Iterable[TSNode]:
        if self.is_match(node, source_file):
            yield node

    def find(self, sources: SourceCollection) -> Outcome:
        outcome = self.new_outcome()
        for source_file in sources.values():
            for node in extract(source_file, self.kind):
                for flagged in self.flagged_nodes(node, source_file):
                    outcome.push_or_insert(self.make_finding(source_file, flagged))
        return outcome
