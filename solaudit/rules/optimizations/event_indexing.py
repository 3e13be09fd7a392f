# Event indexing optimization: flag events that leave cheap indexed topics unused.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, declaration_keywords, declared_type, is_array_type
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule

# An event carries at most three indexed topics (four for anonymous events,
# but anonymous events are rare enough to keep one threshold).
MAX_INDEXED_TOPICS = 3


def count_event_parameters(event: TSNode) -> tuple[int, int]:
    """Return (indexed parameter count, non-array parameter count) of an event."""
    indexed = 0
    non_array = 0
    for param in event.named_children:
        if param.type != "event_parameter":
            continue
        if "indexed" in declaration_keywords(param):
            indexed += 1
        if not is_array_type(declared_type(param)):
            non_array += 1
    return indexed, non_array


class EventIndexingRule(NodeRule):
    """
    Indexing value-type event parameters makes logs cheaper to filter.

    Flags an event when it has at least ``max_indexed`` non-array parameters
    but fewer than ``max_indexed`` indexed ones, or when it has fewer
    non-array parameters than that and not all of them are indexed.
    """

    id = "event-indexing"
    name = "Event parameters not indexed"
    category = Category.OPTIMIZATION
    severity = "gas"
    kind = ConstructKind.EVENT

    def __init__(self, max_indexed: int = MAX_INDEXED_TOPICS) -> None:
        self.max_indexed = max_indexed

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        indexed, non_array = count_event_parameters(node)
        if non_array >= self.max_indexed:
            return indexed < self.max_indexed
        return indexed != non_array

    def message_for(self, source_file: SourceFile, node: TSNode) -> str:
        indexed, non_array = count_event_parameters(node)
        return (
            f"Event indexes {indexed} of {non_array} value-type parameter(s); "
            f"index up to {self.max_indexed} to save gas for log consumers."
        )
