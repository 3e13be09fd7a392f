"""Unit tests for the event_indexing optimization rule."""

from pathlib import Path

from solaudit.context import sources_from_strings
from solaudit.extractors import extract_events
from solaudit.findings.models import Category
from solaudit.rules.optimizations.event_indexing import (
    MAX_INDEXED_TOPICS,
    EventIndexingRule,
    count_event_parameters,
)

EVENTS = """
pragma solidity >= 0.8.0;
contract Contract {

    event IsNotOptimized(address addr1, address indexed addr2);
    event IsOptimized(address indexed addr1, address indexed addr2, address indexed addr3);
    event AlsoIsNotOptimized(address addr1, address indexed addr2, address indexed addr3);

}
"""


def _find(source: str, rule: EventIndexingRule | None = None, name: str = "event_indexing.sol"):
    sources = sources_from_strings({name: source})
    return (rule or EventIndexingRule()).find(sources)


def test_flags_unindexed_events_in_declaration_order():
    outcome = _find(EVENTS)
    assert outcome.rule_id == "event-indexing"
    assert outcome.category == Category.OPTIMIZATION
    assert outcome.finding_count == 2
    assert outcome.paths == [Path("event_indexing.sol")]
    snippets = [f.snippet for f in outcome.findings[Path("event_indexing.sol")]]
    assert snippets[0].startswith("event IsNotOptimized")
    assert snippets[1].startswith("event AlsoIsNotOptimized")


def test_count_event_parameters():
    sources = sources_from_strings({"e.sol": EVENTS})
    events = extract_events(sources[Path("e.sol")])
    assert [count_event_parameters(e) for e in events] == [(1, 2), (3, 3), (2, 3)]


def test_array_parameters_do_not_count_towards_threshold():
    source = """
contract Arrays {
    event Batch(uint256[] ids, address indexed operator);
    event Raw(bytes32[] hashes, uint256[4] amounts);
}
"""
    outcome = _find(source)
    assert outcome.finding_count == 0
    assert outcome.findings == {}


def test_threshold_is_configurable():
    assert MAX_INDEXED_TOPICS == 3
    outcome = _find(EVENTS, rule=EventIndexingRule(max_indexed=2))
    findings = outcome.all_findings()
    assert len(findings) == 1
    assert findings[0].snippet.startswith("event IsNotOptimized")


def test_no_events_yields_empty_outcome():
    outcome = _find("contract Empty { uint256 x; }")
    assert outcome.finding_count == 0
    assert outcome.paths == []


def test_finding_location_and_message():
    outcome = _find(EVENTS)
    finding = outcome.all_findings()[0]
    loc = finding.location
    assert loc.path == Path("event_indexing.sol")
    assert loc.line == 5
    assert loc.column == 5
    assert loc.end_line == 5
    assert EVENTS.encode()[loc.start_byte : loc.end_byte].decode() == finding.snippet
    assert finding.severity == "gas"
    assert "1 of 2" in finding.message


def test_snippet_parses_back_to_an_event():
    outcome = _find(EVENTS)
    for finding in outcome.all_findings():
        wrapped = sources_from_strings({"roundtrip.sol": f"contract R {{ {finding.snippet} }}"})
        events = extract_events(wrapped[Path("roundtrip.sol")])
        assert len(events) == 1


def test_outcome_keys_are_source_keys_across_files():
    sources = sources_from_strings(
        {
            "a.sol": EVENTS,
            "b.sol": "contract B { event Ok(address indexed who); }",
            "c.sol": "contract C { event Bad(uint256 amount); }",
        }
    )
    outcome = EventIndexingRule().find(sources)
    assert set(outcome.paths) <= set(sources)
    assert outcome.paths == [Path("a.sol"), Path("c.sol")]


def test_deterministic():
    sources = sources_from_strings({"a.sol": EVENTS})
    rule = EventIndexingRule()
    assert rule.find(sources) == rule.find(sources)
