"""
File system traversal: walk directories and collect Solidity source files.

Recursively collects ``.sol`` files for analysis while skipping build output,
dependency trees and test folders of the common Solidity toolchains
(Foundry, Hardhat, Truffle).

Typical usage:
    from pathlib import Path
    from solaudit.traversal import find_solidity_files

    files = find_solidity_files(Path("./contracts"))

    # Custom ignore patterns, keep Foundry test/script files
    files = find_solidity_files(
        Path("./src"),
        ignore_dirs={"out", "lib"},
        include_tests=True,
    )
"""

import logging
from pathlib import Path
from typing import Optional, Set

logger = logging.getLogger(__name__)

SOLIDITY_SUFFIX = ".sol"

# Foundry naming conventions for tests and deployment scripts
TEST_SUFFIXES = (".t.sol", ".s.sol")

# Default directories to ignore during traversal
DEFAULT_IGNORE_DIRS: Set[str] = {
    # Build and compiler output
    "out",
    "build",
    "artifacts",
    "cache",
    "typechain",
    "typechain-types",
    "coverage",

    # Test directories (we want to scan production contracts, not fixtures)
    "test",
    "tests",

    # Dependency and package directories
    "node_modules",
    "lib",

    # Version control
    ".git",
    ".svn",
    ".hg",

    # IDE and editor directories
    ".vscode",
    ".idea",

    # Python virtual environments (brownie/ape projects)
    "venv",
    ".venv",
    "__pycache__",
}


def is_solidity_file(path: Path) -> bool:
    """
    Check if a file is a Solidity source file (.sol extension).

    Examples:
        >>> is_solidity_file(Path("Token.sol"))
        True
        >>> is_solidity_file(Path("token.js"))
        False
    """
    return path.suffix.lower() == SOLIDITY_SUFFIX


def is_test_file(path: Path) -> bool:
    """Check if a file follows the Foundry test/script naming (``*.t.sol``, ``*.s.sol``)."""
    return path.name.lower().endswith(TEST_SUFFIXES)


def should_ignore_directory(dir_path: Path, ignore_dirs: Set[str]) -> bool:
    """
    Check if a directory should be ignored during traversal.

    Only the directory name is compared, not the full path.

    Examples:
        >>> should_ignore_directory(Path("node_modules"), {"node_modules"})
        True
        >>> should_ignore_directory(Path("contracts"), {"node_modules"})
        False
    """
    return dir_path.name in ignore_dirs


def find_solidity_files(
    root: Path,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
    include_tests: bool = False,
) -> list[Path]:
    """
    Recursively find all Solidity source files in a directory tree.

    Args:
        root: Root directory to start traversal from.
        ignore_dirs: Set of directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
        follow_symlinks: If True, follow symbolic links during traversal.
        include_tests: If True, keep ``*.t.sol`` and ``*.s.sol`` files.

    Returns:
        Sorted list of paths to every matching ``.sol`` file.

    Raises:
        FileNotFoundError: If the root directory does not exist.
        NotADirectoryError: If root is not a directory.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()

    if not root.exists():
        logger.error("Root directory does not exist: %s", root)
        raise FileNotFoundError(f"Root directory does not exist: {root}")

    if not root.is_dir():
        logger.error("Root path is not a directory: %s", root)
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    logger.info("Starting traversal from: %s", root)
    logger.debug(
        "Traversal config: follow_symlinks=%s, include_tests=%s, ignore_dirs=%s",
        follow_symlinks,
        include_tests,
        ignore_dirs,
    )

    collected_files: list[Path] = []

    def _walk_directory(current_dir: Path) -> None:
        try:
            for entry in current_dir.iterdir():
                if entry.is_symlink() and not follow_symlinks:
                    logger.debug("Skipping symlink: %s", entry)
                    continue

                if entry.is_dir():
                    if should_ignore_directory(entry, ignore_dirs):
                        logger.debug("Ignoring directory: %s", entry)
                        continue
                    _walk_directory(entry)

                elif entry.is_file() and is_solidity_file(entry):
                    if not include_tests and is_test_file(entry):
                        logger.debug("Skipping test file: %s", entry)
                        continue
                    logger.debug("Found source file: %s", entry)
                    collected_files.append(entry)

        except PermissionError as e:
            logger.warning("Permission denied accessing directory %s: %s", current_dir, e)
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)

    _walk_directory(root)

    # Sort for deterministic ordering
    collected_files.sort()

    logger.info(
        "Traversal complete: found %d source file(s) in %s",
        len(collected_files),
        root,
    )
    return collected_files
