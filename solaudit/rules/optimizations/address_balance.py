# address(this).balance optimization: SELFBALANCE is cheaper than BALANCE on the own address.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, compact_text
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


class AddressBalanceRule(NodeRule):
    """Flags ``address(this).balance``; ``selfbalance()`` in assembly avoids the BALANCE opcode."""

    id = "address-balance"
    name = "Use selfbalance() instead of address(this).balance"
    category = Category.OPTIMIZATION
    severity = "gas"
    kind = ConstructKind.MEMBER_ACCESS

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        return compact_text(node) == "address(this).balance"
