# Split require optimization: require(a && b) costs more than two separate requires.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, call_arguments, call_name, operator
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


class MultipleRequireRule(NodeRule):
    """Flags ``require`` calls whose condition is a top-level ``&&`` conjunction."""

    id = "multiple-require"
    name = "Split require() statements that use &&"
    category = Category.OPTIMIZATION
    severity = "gas"
    kind = ConstructKind.CALL

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        if call_name(node) != "require":
            return False
        args = call_arguments(node)
        if not args:
            return False
        condition = args[0]
        return condition.type == "binary_expression" and operator(condition) == "&&"
