"""Tests for file system traversal."""

from pathlib import Path

import pytest

from solaudit.traversal import (
    DEFAULT_IGNORE_DIRS,
    find_solidity_files,
    is_solidity_file,
    is_test_file,
    should_ignore_directory,
)


class TestFileTypeChecks:
    def test_is_solidity_file(self):
        assert is_solidity_file(Path("Token.sol"))
        assert is_solidity_file(Path("TOKEN.SOL"))
        assert not is_solidity_file(Path("token.js"))
        assert not is_solidity_file(Path("README.md"))

    def test_is_test_file(self):
        assert is_test_file(Path("Token.t.sol"))
        assert is_test_file(Path("Deploy.s.sol"))
        assert not is_test_file(Path("Token.sol"))


class TestDirectoryFiltering:
    def test_should_ignore_directory(self):
        assert should_ignore_directory(Path("node_modules"), DEFAULT_IGNORE_DIRS)
        assert should_ignore_directory(Path("lib"), DEFAULT_IGNORE_DIRS)
        assert not should_ignore_directory(Path("contracts"), DEFAULT_IGNORE_DIRS)


class TestFindSolidityFiles:
    @pytest.fixture
    def project(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "Token.sol").write_text("contract Token {}")
        (tmp_path / "src" / "Token.t.sol").write_text("contract TokenTest {}")
        (tmp_path / "src" / "nested").mkdir()
        (tmp_path / "src" / "nested" / "Vault.sol").write_text("contract Vault {}")
        (tmp_path / "node_modules" / "dep").mkdir(parents=True)
        (tmp_path / "node_modules" / "dep" / "Dep.sol").write_text("contract Dep {}")
        (tmp_path / "Main.sol").write_text("contract Main {}")
        return tmp_path

    def test_finds_sorted_and_skips_ignored(self, project):
        files = find_solidity_files(project)
        rel = [f.relative_to(project.resolve()).as_posix() for f in files]
        assert rel == ["Main.sol", "src/Token.sol", "src/nested/Vault.sol"]

    def test_include_tests(self, project):
        files = find_solidity_files(project, include_tests=True)
        assert any(f.name == "Token.t.sol" for f in files)

    def test_custom_ignore_dirs(self, project):
        files = find_solidity_files(project, ignore_dirs={"src"})
        names = sorted(f.name for f in files)
        assert names == ["Dep.sol", "Main.sol"]

    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            find_solidity_files(tmp_path / "missing")

    def test_root_is_file(self, project):
        with pytest.raises(NotADirectoryError):
            find_solidity_files(project / "Main.sol")
