"""
Extraction layer: pull ordered sequences of one construct kind out of a parsed
Solidity tree.

Every rule goes through ``extract`` (or one of its typed wrappers) instead of
walking the tree itself. Results come back in source declaration order
regardless of nesting depth, and the tree is never modified.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional

from tree_sitter import Node as TSNode

from solaudit.context import SourceFile
from solaudit.errors import ExtractionError
from solaudit.parser import ROOT_NODE_TYPE


class ConstructKind(str, Enum):
    """Syntactic constructs rules can ask for, keyed by grammar node type."""

    CONTRACT = "contract_declaration"
    INTERFACE = "interface_declaration"
    LIBRARY = "library_declaration"
    EVENT = "event_definition"
    FUNCTION = "function_definition"
    CONSTRUCTOR = "constructor_definition"
    MODIFIER = "modifier_definition"
    STATE_VARIABLE = "state_variable_declaration"
    PRAGMA = "pragma_directive"
    USING_DIRECTIVE = "using_directive"
    CALL = "call_expression"
    MEMBER_ACCESS = "member_expression"
    BINARY_EXPRESSION = "binary_expression"
    UPDATE_EXPRESSION = "update_expression"
    FOR_LOOP = "for_statement"
    IF_STATEMENT = "if_statement"


# Named nodes that only carry a declaration specifier keyword.
SPECIFIER_TYPES = frozenset({"visibility", "state_mutability", "virtual", "immutable", "constant"})

VISIBILITIES = frozenset({"public", "private", "internal", "external"})

# Wrapper nodes with a single meaningful child.
_TRANSPARENT_TYPES = frozenset({"expression", "call_argument", "parenthesized_expression", "tuple_expression"})

_ARGUMENT_LIST_TYPES = frozenset({"call_arguments", "arguments"})


def _walk(node: TSNode) -> Iterator[TSNode]:
    """Yield every descendant of node in document order (DFS)."""
    yield node
    for child in node.children:
        yield from _walk(child)


def _checked_root(source_file: SourceFile) -> TSNode:
    tree = source_file.tree
    root = tree.root_node if tree is not None else None
    if root is None:
        raise ExtractionError(f"{source_file.path}: tree has no root node")
    if root.type != ROOT_NODE_TYPE:
        raise ExtractionError(
            f"{source_file.path}: expected root {ROOT_NODE_TYPE!r}, got {root.type!r}"
        )
    return root


def extract(source_file: SourceFile, kind: ConstructKind) -> list[TSNode]:
    """
    Return every node of ``kind`` in the file, in source declaration order.

    An empty list means the file has no such construct.

    Raises:
        ExtractionError: the tree is structurally degenerate.
    """
    root = _checked_root(source_file)
    return [node for node in _walk(root) if node.type == kind.value]


def extract_within(node: TSNode, kind: ConstructKind) -> list[TSNode]:
    """Like extract(), but limited to the subtree rooted at ``node`` (node excluded)."""
    return [n for n in _walk(node) if n is not node and n.type == kind.value]


def extract_events(source_file: SourceFile) -> list[TSNode]:
    return extract(source_file, ConstructKind.EVENT)


def extract_functions(source_file: SourceFile) -> list[TSNode]:
    return extract(source_file, ConstructKind.FUNCTION)


def extract_state_variables(source_file: SourceFile) -> list[TSNode]:
    return extract(source_file, ConstructKind.STATE_VARIABLE)


def extract_contracts(source_file: SourceFile) -> list[TSNode]:
    return extract(source_file, ConstructKind.CONTRACT)


def extract_calls(source_file: SourceFile) -> list[TSNode]:
    return extract(source_file, ConstructKind.CALL)


def extract_pragmas(source_file: SourceFile) -> list[TSNode]:
    return extract(source_file, ConstructKind.PRAGMA)


# --- node helpers ----------------------------------------------------------


def node_text(node: TSNode) -> str:
    """Source text of a node."""
    return node.text.decode("utf-8", errors="replace")


def compact_text(node: TSNode) -> str:
    """Source text with all whitespace removed (``address( this ).balance`` -> ``address(this).balance``)."""
    return "".join(node_text(node).split())


def require_field(node: TSNode, name: str) -> TSNode:
    """
    Return the child stored under field ``name``.

    Raises:
        ExtractionError: the construct has no such field.
    """
    child = node.child_by_field_name(name)
    if child is None:
        line = node.start_point[0] + 1
        raise ExtractionError(f"{node.type} at line {line} has no {name!r} field")
    return child


def field_text(node: TSNode, name: str) -> Optional[str]:
    child = node.child_by_field_name(name)
    return node_text(child) if child is not None else None


def declaration_keywords(node: TSNode) -> set[str]:
    """
    Keywords attached directly to a declaration: visibility, mutability,
    ``constant``, ``immutable``, ``indexed`` and similar bare tokens.
    """
    keywords: set[str] = set()
    for child in node.children:
        if child.type in SPECIFIER_TYPES or not child.is_named:
            keywords.add(node_text(child).strip())
    return keywords


def visibility(node: TSNode) -> Optional[str]:
    """Explicit visibility of a function or state variable, or None when omitted."""
    found = declaration_keywords(node) & VISIBILITIES
    return next(iter(found)) if found else None


def unwrap(node: TSNode) -> TSNode:
    """Strip expression/argument/parenthesis wrappers down to the real expression."""
    while node.type in _TRANSPARENT_TYPES and node.named_child_count == 1:
        node = node.named_children[0]
    return node


def operator(node: TSNode) -> Optional[str]:
    """Operator token of a binary or update expression."""
    op = node.child_by_field_name("operator")
    if op is not None:
        return node_text(op)
    for child in node.children:
        if not child.is_named:
            return child.type
    return None


def call_name(node: TSNode) -> Optional[str]:
    """Callee text of a call expression (``require``, ``token.transfer``), or None."""
    callee = node.child_by_field_name("function")
    if callee is None and node.named_child_count:
        callee = node.named_children[0]
    if callee is None:
        return None
    return compact_text(callee)


def call_arguments(node: TSNode) -> list[TSNode]:
    """Argument expressions of a call, unwrapped, in order."""
    callee = node.child_by_field_name("function")
    named = node.named_children
    if callee is None and named:
        callee = named[0]
    args: list[TSNode] = []
    for child in named:
        if child == callee:
            continue
        if child.type in _ARGUMENT_LIST_TYPES:
            args.extend(unwrap(arg) for arg in child.named_children)
        else:
            args.append(unwrap(child))
    return args


def is_array_type(type_node: TSNode) -> bool:
    """True for array/slice types such as ``uint256[]`` or ``bytes32[4]``."""
    return any(child.type == "[" for child in type_node.children)


def is_string_literal(node: TSNode) -> bool:
    text = node_text(unwrap(node)).lstrip()
    return text.startswith(('"', "'", 'unicode"', "unicode'"))


def declared_type(node: TSNode) -> TSNode:
    """
    Type node of a parameter or variable declaration.

    Raises:
        ExtractionError: the declaration carries no type.
    """
    type_node = node.child_by_field_name("type")
    if type_node is None and node.named_children:
        type_node = node.named_children[0]
    if type_node is None:
        return require_field(node, "type")
    return type_node
