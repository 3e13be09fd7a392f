# Constant visibility optimization: public constants generate a getter that costs deployment gas.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, declaration_keywords
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


class PrivateConstantRule(NodeRule):
    """Flags ``public constant`` state variables; ``private`` drops the generated getter."""

    id = "private-constant"
    name = "Mark constants private"
    category = Category.OPTIMIZATION
    severity = "gas"
    kind = ConstructKind.STATE_VARIABLE

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        keywords = declaration_keywords(node)
        return "constant" in keywords and "public" in keywords
