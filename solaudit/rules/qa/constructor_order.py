# Layout convention: the constructor comes before any function in a contract.

from __future__ import annotations

from typing import Iterable

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


def contract_members(contract: TSNode) -> list[TSNode]:
    body = contract.child_by_field_name("body")
    if body is None:
        body = next((c for c in contract.named_children if c.type == "contract_body"), None)
    return body.named_children if body is not None else []


class ConstructorOrderRule(NodeRule):
    """Flags a constructor declared after the first function of its contract."""

    id = "constructor-order"
    name = "Constructor should be placed before functions"
    category = Category.QUALITY
    severity = "info"
    kind = ConstructKind.CONTRACT

    def flagged_nodes(self, node: TSNode, source_file: SourceFile) -> Iterable[TSNode]:
        seen_function = False
        for member in contract_members(node):
            if member.type == ConstructKind.FUNCTION.value:
                seen_function = True
            elif member.type == ConstructKind.CONSTRUCTOR.value and seen_function:
                yield member
