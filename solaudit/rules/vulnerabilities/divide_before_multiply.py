# Precision loss detection: integer division before multiplication truncates early.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, operator, unwrap
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


class DivideBeforeMultiplyRule(NodeRule):
    """Flags ``(a / b) * c``; reorder to ``a * c / b`` to keep precision."""

    id = "divide-before-multiply"
    name = "Division before multiplication"
    category = Category.VULNERABILITY
    severity = "medium"
    kind = ConstructKind.BINARY_EXPRESSION

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        if operator(node) != "*":
            return False
        left = node.child_by_field_name("left")
        if left is None and node.named_child_count:
            left = node.named_children[0]
        if left is None:
            return False
        left = unwrap(left)
        return left.type == "binary_expression" and operator(left) == "/"
