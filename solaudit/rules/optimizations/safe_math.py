# SafeMath optimization: since 0.8.0 arithmetic is checked by the compiler.

from __future__ import annotations

from typing import Optional

from solaudit.context import SourceCollection, SourceFile
from solaudit.extractors import ConstructKind, compact_text, extract, node_text
from solaudit.findings.models import Category, Outcome
from solaudit.rules.base import Rule
from solaudit.versions import Version, minimum_version, solidity_constraint

SAFE_MATH_BUILTIN_VERSION: Version = (0, 8, 0)


def file_minimum_version(source_file: SourceFile) -> Optional[Version]:
    """Highest minimum version required by the file's ``pragma solidity`` directives."""
    required: Optional[Version] = None
    for pragma in extract(source_file, ConstructKind.PRAGMA):
        constraint = solidity_constraint(node_text(pragma))
        if constraint is None:
            continue
        version = minimum_version(constraint)
        if version is not None and (required is None or version > required):
            required = version
    return required


class SafeMathRule(Rule):
    """Flags ``using SafeMath for ...`` in files that only compile with 0.8.0 or later."""

    id = "safe-math"
    name = "SafeMath is redundant on Solidity >= 0.8.0"
    category = Category.OPTIMIZATION
    severity = "gas"

    def __init__(self, builtin_version: Version = SAFE_MATH_BUILTIN_VERSION) -> None:
        self.builtin_version = builtin_version

    def find(self, sources: SourceCollection) -> Outcome:
        outcome = self.new_outcome()
        for source_file in sources.values():
            directives = [
                node
                for node in extract(source_file, ConstructKind.USING_DIRECTIVE)
                if compact_text(node).startswith("usingSafeMath")
            ]
            if not directives:
                continue
            version = file_minimum_version(source_file)
            if version is None or version < self.builtin_version:
                continue
            for node in directives:
                outcome.push_or_insert(self.make_finding(source_file, node))
        return outcome
