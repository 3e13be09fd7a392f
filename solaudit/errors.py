"""
Error taxonomy for analysis runs.

Every failure raised while loading sources or running a rule derives from
``EngineError``. Rules raise the leaf types; the category module tags them with
their origin by wrapping them in ``RuleError`` (original error kept as
``__cause__`` and ``RuleError.cause``).
"""

from __future__ import annotations

from pathlib import Path


class EngineError(Exception):
    """Base class for all analysis failures."""

    kind = "engine"


class SourceLoadError(EngineError):
    """A source file could not be read or did not parse cleanly."""

    kind = "source-load"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class ExtractionError(EngineError):
    """A parsed tree did not have the structure an extractor expects."""

    kind = "extraction"


class PatternError(EngineError):
    """A rule supplied a matching pattern that does not compile."""

    kind = "pattern"

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern


class NumericParseError(EngineError):
    """A rule could not interpret a numeric literal it needed."""

    kind = "numeric-parse"

    def __init__(self, literal: str, reason: str) -> None:
        super().__init__(f"cannot parse {literal!r} as a number: {reason}")
        self.literal = literal


class RuleError(EngineError):
    """Failure of one rule, tagged with the rule and category it came from."""

    kind = "rule"

    def __init__(self, rule_id: str, category: str, cause: Exception) -> None:
        super().__init__(f"rule {rule_id} in category {category} failed because {cause}")
        self.rule_id = rule_id
        self.category = category
        self.cause = cause

    @property
    def error_kind(self) -> str:
        """Taxonomy name of the underlying failure."""
        return getattr(self.cause, "kind", "internal")
