# Loop bound optimization: reading .length in a for condition costs an SLOAD/MLOAD per iteration.

from __future__ import annotations

from typing import Optional

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, node_text
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule


def loop_condition(node: TSNode, source_file: SourceFile) -> Optional[str]:
    """Condition text of a for statement (``i < arr.length``), or None for ``for (;;)``."""
    condition = node.child_by_field_name("condition")
    if condition is not None:
        return node_text(condition)
    body = node.child_by_field_name("body")
    end = body.start_byte if body is not None else node.end_byte
    header = source_file.source[node.start_byte : end].decode("utf-8", errors="replace")
    parts = header.split(";")
    return parts[1] if len(parts) >= 3 else None


class CacheArrayLengthRule(NodeRule):
    """Flags ``for`` loops whose condition reads ``<array>.length`` instead of a cached local."""

    id = "cache-array-length"
    name = "Cache array length outside of loop"
    category = Category.OPTIMIZATION
    severity = "gas"
    kind = ConstructKind.FOR_LOOP

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        condition = loop_condition(node, source_file)
        return condition is not None and ".length" in "".join(condition.split())
