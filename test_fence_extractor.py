"""
Tests for incremental fenced code block extraction.
"""

import pytest

from core.errors import InvalidTransition
from core.fence_extractor import FenceExtractor, FenceState


def feed_all(pieces, language=None):
    """Feed pieces one by one and return (increments, extractor)."""
    extractor = FenceExtractor(language=language)
    increments = []
    for piece in pieces:
        increments.extend(extractor.process(piece))
    increments.extend(extractor.flush())
    return increments, extractor


def test_tagged_fence_extracts_interior():
    increments, extractor = feed_all(["```mermaid\nX\n```"])
    assert "".join(increments).strip() == "X"
    assert extractor.state is FenceState.DONE


def test_bare_fence_extracts_interior():
    increments, extractor = feed_all(["```\nX\n```"])
    assert "".join(increments).strip() == "X"
    assert extractor.state is FenceState.DONE


def test_bare_fence_before_tagged_fence_wins():
    """A bare fence earlier in the buffer is chosen over a later tagged one."""
    increments, _ = feed_all(["```\nfirst\n```\n```mermaid\nsecond\n```"])
    assert "".join(increments) == "first\n"


def test_prose_around_fence_is_discarded():
    increments, _ = feed_all([
        "Sure! Here is your diagram:\n\n```mermaid\nflowchart TD\nA --> B\n```\nHope it helps."
    ])
    assert "".join(increments) == "flowchart TD\nA --> B\n"


def test_chunk_boundary_independence():
    split, _ = feed_all(["```mermaid\nAB", "CD```"])
    whole, _ = feed_all(["```mermaid\nABCD```"])
    assert "".join(split) == "ABCD"
    assert "".join(split) == "".join(whole)


def test_character_by_character_feed_matches_whole():
    text = "intro\n```mermaid\nsequenceDiagram\nAlice->>Bob: hi\n```\ntrailer"
    pieces, _ = feed_all(list(text))
    whole, _ = feed_all([text])
    assert "".join(pieces) == "".join(whole) == "sequenceDiagram\nAlice->>Bob: hi\n"


def test_interior_is_released_before_closing_fence():
    extractor = FenceExtractor()
    assert extractor.process("```mermaid\n") == []
    assert extractor.state is FenceState.COLLECT
    assert extractor.process("graph LR\n") == ["graph LR\n"]
    assert extractor.process("A --> B\n") == ["A --> B\n"]


def test_nothing_emitted_before_opening_line_completes():
    extractor = FenceExtractor()
    assert extractor.process("```merm") == []
    assert extractor.process("aid") == []
    assert extractor.state is FenceState.SEARCH
    assert extractor.process("\nA") == ["A"]


def test_closing_fence_split_across_deliveries():
    increments, extractor = feed_all(["```mermaid\nA --> B\n`", "`", "`\ntrailing"])
    assert "".join(increments) == "A --> B\n"
    assert extractor.state is FenceState.DONE


def test_held_back_backticks_released_at_end():
    increments, extractor = feed_all(["```mermaid\ncode ``"])
    assert "".join(increments) == "code ``"
    assert extractor.state is FenceState.COLLECT


def test_done_state_absorbs_further_input():
    extractor = FenceExtractor()
    extractor.process("```mermaid\nX\n```")
    assert extractor.state is FenceState.DONE
    assert extractor.process("```mermaid\nY\n```") == []
    assert extractor.process("more text") == []
    assert extractor.flush() == []
    assert extractor.pending == ""


def test_no_fence_produces_nothing():
    increments, extractor = feed_all(["hello ", "world"])
    assert increments == []
    assert extractor.state is FenceState.SEARCH


def test_search_buffer_stays_bounded_without_fence():
    extractor = FenceExtractor()
    for _ in range(1000):
        extractor.process("no fence in this sentence. ")
    assert len(extractor.pending) <= 2


def test_custom_language_tag():
    increments, _ = feed_all(["```plantuml\n@startuml\n```"], language="plantuml")
    assert "".join(increments) == "@startuml\n"


def test_backward_transition_is_rejected():
    extractor = FenceExtractor()
    extractor.process("```\nX\n```")
    with pytest.raises(InvalidTransition):
        extractor._transition(FenceState.COLLECT)
