# Revert reason optimization: custom errors are cheaper to deploy and revert with than strings.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, call_arguments, call_name, is_string_literal
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


class StringErrorsRule(NodeRule):
    """Flags ``require(cond, "reason")``; declare ``error Reason();`` and revert with it instead."""

    id = "string-errors"
    name = "Use custom errors instead of revert strings"
    category = Category.OPTIMIZATION
    severity = "gas"
    kind = ConstructKind.CALL

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        if call_name(node) != "require":
            return False
        return any(is_string_literal(arg) for arg in call_arguments(node)[1:])
