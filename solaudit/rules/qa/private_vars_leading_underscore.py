# Naming convention: non-public state variables start with an underscore.

from __future__ import annotations

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.extractors import ConstructKind, declaration_keywords, node_text, require_field, visibility
from solaudit.findings.models import Category
from solaudit.rules.base import NodeRule

# State variables without an explicit visibility are internal.
DEFAULT_STATE_VISIBILITY = "internal"


class PrivateVarsLeadingUnderscoreRule(NodeRule):
    """Flags private/internal state variables whose name lacks a leading ``_``. Constants are exempt."""

    id = "private-vars-leading-underscore"
    name = "Private and internal variables should start with an underscore"
    category = Category.QUALITY
    severity = "info"
    kind = ConstructKind.STATE_VARIABLE

    def is_match(self, node: TSNode, source_file: SourceFile) -> bool:
        keywords = declaration_keywords(node)
        if "constant" in keywords or "immutable" in keywords:
            return False
        if (visibility(node) or DEFAULT_STATE_VISIBILITY) not in ("private", "internal"):
            return False
        return not node_text(require_field(node, "name")).startswith("_")

    def message_for(self, source_file: SourceFile, node: TSNode) -> str:
        name = node_text(require_field(node, "name"))
        return f"State variable '{name}' is not public; prefix it with '_'."
