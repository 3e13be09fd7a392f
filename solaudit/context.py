# Source loading: per-file state (path, source bytes, AST) and the read-only
# collection of parsed files that one analysis run works on.

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Iterable, Optional

from tree_sitter import Node as TSNode
from tree_sitter import Parser, Tree

from solaudit.errors import SourceLoadError
from solaudit.parser import create_parser, parse_bytes
from solaudit.traversal import find_solidity_files, is_solidity_file

logger = logging.getLogger(__name__)

_CONTRACT_LIKE = frozenset({"contract_declaration", "interface_declaration", "library_declaration"})


def _count_nodes(node: TSNode) -> int:
    """Count all descendants of node (including node itself)."""
    count = 1
    for child in node.children:
        count += _count_nodes(child)
    return count


def _count_contracts(root: TSNode) -> int:
    """Count contract, interface and library declarations under root."""
    count = 1 if root.type in _CONTRACT_LIKE else 0
    for child in root.children:
        count += _count_contracts(child)
    return count


def count_tree_stats(root: TSNode) -> tuple[int, int]:
    """Return (total node count, contract-like declaration count) for the tree."""
    return _count_nodes(root), _count_contracts(root)


class SourceFile:
    """
    One parsed Solidity file: path, raw source bytes, and AST.

    Rules read ``path``, ``source`` and ``tree``; use get_source_span() and
    get_line_col() for snippets and locations.
    """

    def __init__(self, path: Path, source: bytes, tree: Tree) -> None:
        self.path = path
        self.source = source
        self.tree = tree

    @property
    def root_node(self) -> TSNode:
        return self.tree.root_node

    @property
    def has_parse_errors(self) -> bool:
        return self.tree.root_node.has_error

    def __repr__(self) -> str:
        return f"SourceFile(path={self.path!s})"


class SourceCollection(Mapping):
    """
    Read-only, ordered mapping of file path to SourceFile.

    Iteration order is the order files were added (sorted by path when built
    with load_sources), which keeps every outcome's per-file grouping stable.
    """

    def __init__(self, files: Iterable[SourceFile] = ()) -> None:
        self._files: dict[Path, SourceFile] = {}
        for source_file in files:
            self._files[source_file.path] = source_file

    def __getitem__(self, path: Path) -> SourceFile:
        return self._files[path]

    def __iter__(self) -> Iterator[Path]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"SourceCollection({list(self._files)!r})"


def get_source_span(source_file: SourceFile, node: TSNode) -> str:
    """
    Return the substring of source_file.source for the given node's byte range.

    Decodes with errors="replace" so bad UTF-8 does not crash.
    """
    return source_file.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def get_line_col(node: TSNode, one_based: bool = True) -> tuple[int, int]:
    """
    Return (line, column) for the node's start position.

    Tree-sitter uses 0-based (row, col). If one_based=True (default),
    returns 1-based line and column for display.
    """
    row, col = node.start_point
    if one_based:
        return row + 1, col + 1
    return row, col


def get_end_line_col(node: TSNode, one_based: bool = True) -> tuple[int, int]:
    """Return (line, column) for the node's end position."""
    row, col = node.end_point
    if one_based:
        return row + 1, col + 1
    return row, col


def create_source_file(path: Path, parser: Optional[Parser] = None) -> SourceFile:
    """
    Read a Solidity file and parse it into a SourceFile.

    Raises:
        SourceLoadError: the file cannot be read or contains syntax errors.
    """
    if parser is None:
        parser = create_parser()

    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        raise SourceLoadError(path, str(e)) from e

    tree = parse_bytes(source, parser=parser)
    if tree.root_node.has_error:
        logger.error("File %s has syntax errors; aborting source loading", path)
        raise SourceLoadError(path, "syntax errors in source")

    node_count, contract_count = count_tree_stats(tree.root_node)
    logger.info("Parsed %s: %d nodes, %d contract(s)", path, node_count, contract_count)
    return SourceFile(path=path, source=source, tree=tree)


def load_sources(target: Path, parser: Optional[Parser] = None) -> SourceCollection:
    """
    Build the SourceCollection for one run from a ``.sol`` file or a directory.

    All files are parsed before any rule runs. A single unreadable or malformed
    file aborts the whole load: no partial collection is ever returned.

    Raises:
        SourceLoadError: target is missing, not Solidity, or a file failed to load.
    """
    if target.is_file():
        if not is_solidity_file(target):
            raise SourceLoadError(target, "not a .sol file")
        paths = [target]
    elif target.is_dir():
        paths = find_solidity_files(target)
        if not paths:
            logger.warning("No .sol files found under %s", target)
    else:
        raise SourceLoadError(target, "path is neither a file nor a directory")

    if parser is None:
        parser = create_parser()

    collection = SourceCollection(create_source_file(path, parser=parser) for path in paths)
    logger.info("Loaded %d source file(s) from %s", len(collection), target)
    return collection


def sources_from_strings(files: Mapping[str, str], parser: Optional[Parser] = None) -> SourceCollection:
    """
    Build a SourceCollection from in-memory sources keyed by (virtual) file name.

    Useful for tests and for callers that already hold contract text.
    """
    if parser is None:
        parser = create_parser()
    loaded = []
    for name, text in files.items():
        path = Path(name)
        source = text.encode("utf-8")
        tree = parse_bytes(source, parser=parser)
        if tree.root_node.has_error:
            raise SourceLoadError(path, "syntax errors in source")
        loaded.append(SourceFile(path=path, source=source, tree=tree))
    return SourceCollection(loaded)
