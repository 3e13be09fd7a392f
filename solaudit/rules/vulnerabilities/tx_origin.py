# tx.origin detection: authorization through tx.origin is open to phishing via intermediate contracts.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, compact_text
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


class TxOriginRule(NodeRule):
    id = "tx-origin"
    name = "Use of tx.origin"
    category = Category.VULNERABILITY
    severity = "medium"
    kind = ConstructKind.MEMBER_ACCESS

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        return compact_text(node) == "tx.origin"
