# Unprotected selfdestruct detection: anyone able to call the function can destroy the contract.

from __future__ import annotations

from typing import Iterator

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, call_arguments, call_name, compact_text, extract_within, operator
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule

DESTRUCT_CALLS = frozenset({"selfdestruct", "suicide"})
GUARD_CALLS = frozenset({"require", "assert"})
COMPARISONS = frozenset({"==", "!="})
SENDER = "msg.sender"


def guard_conditions(body: TSNode) -> Iterator[TSNode]:
    """Nodes that can act as an access check: require/assert arguments, if conditions, (in)equality tests."""
    for call in extract_within(body, ConstructKind.CALL):
        if call_name(call) in GUARD_CALLS:
            yield from call_arguments(call)
    for branch in extract_within(body, ConstructKind.IF_STATEMENT):
        condition = branch.child_by_field_name("condition")
        if condition is None and branch.named_child_count:
            condition = branch.named_children[0]
        if condition is not None:
            yield condition
    for expr in extract_within(body, ConstructKind.BINARY_EXPRESSION):
        if operator(expr) in COMPARISONS:
            yield expr


class UnprotectedSelfdestructRule(NodeRule):
    """
    Flags functions that call ``selfdestruct`` without any access control:
    no modifier invocation and no ``msg.sender`` inside a require/assert,
    an ``if`` condition or an equality comparison. Other mentions of
    ``msg.sender`` (``emit Log(msg.sender)``, ``selfdestruct(payable(msg.sender))``)
    are not guards.
    """

    id = "unprotected-selfdestruct"
    name = "Unprotected selfdestruct"
    category = Category.VULNERABILITY
    severity = "high"
    kind = ConstructKind.FUNCTION

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        destructs = [
            call for call in extract_within(node, ConstructKind.CALL) if call_name(call) in DESTRUCT_CALLS
        ]
        if not destructs:
            return False
        if any(child.type == "modifier_invocation" for child in node.named_children):
            return False
        body = node.child_by_field_name("body")
        if body is None:
            return True
        sender_checks = sum(compact_text(guard).count(SENDER) for guard in guard_conditions(body))
        return sender_checks == 0
