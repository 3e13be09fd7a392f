# Naming convention: private and internal functions start with an underscore.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, node_text, require_field, visibility
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


class PrivateFuncLeadingUnderscoreRule(NodeRule):
    id = "private-func-leading-underscore"
    name = "Private and internal functions should start with an underscore"
    category = Category.QUALITY
    severity = "info"
    kind = ConstructKind.FUNCTION

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        if visibility(node) not in ("private", "internal"):
            return False
        return not node_text(require_field(node, "name")).startswith("_")

    def message_for(self, source_file: SourceFile, node: TSNode) -> str:
        name = node_text(require_field(node, "name"))
        return f"Function '{name}' is {visibility(node)}; prefix it with '_'."
