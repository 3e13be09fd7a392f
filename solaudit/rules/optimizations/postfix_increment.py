# Increment optimization: ++i skips the temporary copy that i++ keeps.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


class PostfixIncrementRule(NodeRule):
    """Flags ``i++`` / ``i--``; the prefix form is cheaper when the old value is unused."""

    id = "postfix-increment"
    name = "Use prefix increment/decrement"
    category = Category.OPTIMIZATION
    severity = "gas"
    kind = ConstructKind.UPDATE_EXPRESSION

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        if node.child_count < 2:
            return False
        first, last = node.children[0], node.children[-1]
        return first.is_named and last.type in ("++", "--")
