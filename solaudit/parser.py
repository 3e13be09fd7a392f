# Tree-sitter setup and AST parsing: parse Solidity source code into AST trees.

import logging
from typing import Optional

import tree_sitter
from tree_sitter import Language
from tree_sitter_solidity import language as _solidity_language_capsule

logger = logging.getLogger(__name__)

# Solidity grammar: wrap tree-sitter-solidity capsule for use with tree_sitter.Parser
_SOLIDITY_LANGUAGE = Language(_solidity_language_capsule())

ROOT_NODE_TYPE = "source_file"


def get_solidity_language() -> Language:
    """Return the Tree-sitter Language object for Solidity."""
    return _SOLIDITY_LANGUAGE


def create_parser() -> tree_sitter.Parser:
    """Create and return a Tree-sitter Parser configured for Solidity."""
    return tree_sitter.Parser(_SOLIDITY_LANGUAGE)


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse Solidity source bytes into an AST.

    Args:
        source: UTF-8 encoded Solidity source code.
        parser: Optional parser instance; if None, a new one is created.

    Returns:
        The parse tree. Check tree.root_node.has_error for syntax errors.
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning(
            "Parse completed with errors: root=%s",
            tree.root_node.type,
        )
    else:
        logger.debug(
            "Parse succeeded: root=%s",
            tree.root_node.type,
        )
    return tree
