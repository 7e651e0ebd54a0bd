"""Tokenising and stemming tests."""

from __future__ import annotations

from sitelinker.engine.text import is_stop_word, normalize_tokens, stem, stems


def test_stem_collapses_inflections():
    assert stem("baking") == stem("bake") == "bak"
    assert stem("guides") == stem("guide") == "guid"
    assert stem("management") == stem("manage")
    assert stem("processes") == stem("process") == "process"
    assert stem("boxes") == "box"
    assert stem("cities") == "city"
    assert stem("quickly") == "quick"
    assert stem("cooked") == stem("cooking") == stem("cooks") == "cook"


def test_stem_never_shortens_below_three_characters():
    assert stem("nation") == "nation"
    assert stem("bed") == "bed"
    assert len(stem("sing")) >= 3


def test_normalize_tokens_drops_short_words_and_stop_words():
    assert normalize_tokens("The Dog's bowl, and a cat!") == ["dogs", "bowl", "cat"]
    assert normalize_tokens("") == []


def test_stems_is_a_pure_set_function():
    first = stems("Sourdough Baking Guide")
    second = stems("Sourdough Baking Guide")
    assert first == second == {"sourdough", "bak", "guid"}
    assert stems("guide to sourdough baking") == first


def test_is_stop_word_handles_case_and_punctuation():
    assert is_stop_word("The")
    assert is_stop_word("(and")
    assert is_stop_word("—")
    assert not is_stop_word("flour.")
    assert not is_stop_word("Sourdough")
