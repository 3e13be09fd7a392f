# Floating pragma detection: contracts should be deployed with the compiler they were tested with.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceCollection, SourceFile
from solaudit.extractors import extract_pragmas, node_text
from solaudit.findings.models import Category, Outcome
from solaudit.rules.base import Rule, compile_pattern
from solaudit.versions import solidity_constraint

# Anything other than a single exact version: caret, tilde, comparisons,
# wildcards, ranges or alternatives.
FLOATING_CONSTRAINT_PATTERN = r"[\^~<>*|]|\d\s*-\s*\d|\.[xX*]"


class FloatingPragmaRule(Rule):
    """Flags ``pragma solidity`` directives that do not pin one compiler version."""

    id = "floating-pragma"
    name = "Floating pragma"
    category = Category.VULNERABILITY
    severity = "low"

    def __init__(self, pattern: str = FLOATING_CONSTRAINT_PATTERN) -> None:
        self.pattern = pattern

    def find(self, sources: SourceCollection) -> Outcome:
        floating = compile_pattern(self.pattern)
        outcome = self.new_outcome()
        for source_file in sources.values():
            for node in extract_pragmas(source_file):
                constraint = solidity_constraint(node_text(node))
                if constraint is not None and floating.search(constraint):
                    outcome.push_or_insert(self.make_finding(source_file, node))
        return outcome

    def message_for(self, source_file: SourceFile, node: TSNode) -> str:
        return f"Compiler version is not pinned: {node_text(node).strip()}"
