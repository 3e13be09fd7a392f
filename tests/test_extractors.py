"""Tests for the extraction layer."""

from pathlib import Path

import pytest

from solaudit.context import SourceFile, sources_from_strings
from solaudit.errors import ExtractionError
from solaudit.extractors import (
    ConstructKind,
    call_arguments,
    call_name,
    declaration_keywords,
    extract,
    extract_calls,
    extract_contracts,
    extract_events,
    extract_functions,
    extract_pragmas,
    extract_state_variables,
    field_text,
    node_text,
    require_field,
    visibility,
)
from solaudit.parser import parse_bytes

SOURCE = """
pragma solidity ^0.8.0;

contract Outer {
    event First(address indexed who);
    uint256 private counter;
    uint256 public constant LIMIT = 5;

    function bump() external {
        counter += 1;
        require(counter < LIMIT, "too many");
    }
}

contract Second {
    event Second(uint256 value);
    function helper() internal pure returns (uint256) { return 1; }
}
"""


@pytest.fixture
def source_file() -> SourceFile:
    return sources_from_strings({"x.sol": SOURCE})[Path("x.sol")]


def test_extract_events_in_declaration_order(source_file):
    events = extract_events(source_file)
    assert [field_text(e, "name") for e in events] == ["First", "Second"]


def test_extract_functions_across_contracts(source_file):
    names = [node_text(require_field(f, "name")) for f in extract_functions(source_file)]
    assert names == ["bump", "helper"]


def test_extract_state_variables(source_file):
    variables = extract_state_variables(source_file)
    assert [field_text(v, "name") for v in variables] == ["counter", "LIMIT"]
    assert visibility(variables[0]) == "private"
    assert "constant" in declaration_keywords(variables[1])


def test_extract_contracts_and_pragmas(source_file):
    assert [field_text(c, "name") for c in extract_contracts(source_file)] == ["Outer", "Second"]
    assert [node_text(p) for p in extract_pragmas(source_file)] == ["pragma solidity ^0.8.0;"]


def test_call_helpers(source_file):
    calls = [c for c in extract_calls(source_file) if call_name(c) == "require"]
    assert len(calls) == 1
    args = call_arguments(calls[0])
    assert [node_text(a) for a in args] == ["counter < LIMIT", '"too many"']


def test_extract_missing_kind_is_empty(source_file):
    assert extract(source_file, ConstructKind.MODIFIER) == []
    assert extract(source_file, ConstructKind.FOR_LOOP) == []


def test_extract_does_not_mutate_tree(source_file):
    before = str(source_file.root_node)
    extract(source_file, ConstructKind.EVENT)
    assert str(source_file.root_node) == before


def test_extract_is_deterministic(source_file):
    first = [n.start_byte for n in extract(source_file, ConstructKind.STATE_VARIABLE)]
    second = [n.start_byte for n in extract(source_file, ConstructKind.STATE_VARIABLE)]
    assert first == second


def test_extract_rejects_degenerate_tree():
    source = b"contract A {}"
    tree = parse_bytes(source)

    class _Subtree:
        root_node = tree.root_node.named_children[0]

    degenerate = SourceFile(path=Path("a.sol"), source=source, tree=_Subtree())
    with pytest.raises(ExtractionError):
        extract_events(degenerate)


def test_require_field_missing(source_file):
    pragma = extract_pragmas(source_file)[0]
    with pytest.raises(ExtractionError):
        require_field(pragma, "name")
