"""Greedy selection tests."""

from __future__ import annotations

from typing import Sequence

from sitelinker.engine.selection import clamp_score, rank_candidates, select_candidates
from sitelinker.engine.types import AnchorCandidate, ParagraphSpan

from .conftest import make_page


def _spans(cumulative: Sequence[int]):
    spans = []
    previous = 0
    for index, total in enumerate(cumulative):
        spans.append(
            ParagraphSpan(
                index=index,
                text="",
                word_count=total - previous,
                cumulative_word_count=total,
                has_existing_link=False,
                start=index * 10,
                end=index * 10 + 9,
                inner_start=index * 10 + 3,
                inner_end=index * 10 + 5,
            )
        )
        previous = total
    return spans


def _candidate(paragraph: int, page_number: int, score: float) -> AnchorCandidate:
    page = make_page(f"https://example.com/page-{page_number}", f"Page {page_number}")
    return AnchorCandidate(
        anchor_text=f"anchor phrase {paragraph}-{page_number}",
        page=page,
        score=score,
        paragraph_index=paragraph,
        catalog_index=page_number,
        context_snippet="…context…",
    )


def test_zero_or_negative_budget_returns_nothing(engine_config):
    candidates = [_candidate(0, 0, 80.0)]
    assert select_candidates(candidates, _spans([100]), 0, engine_config) == []
    assert select_candidates(candidates, _spans([100]), -3, engine_config) == []


def test_ties_break_on_paragraph_then_catalog_order():
    ordered = rank_candidates(
        [_candidate(2, 0, 50.0), _candidate(1, 3, 50.0), _candidate(1, 2, 50.0), _candidate(5, 9, 70.0)]
    )
    assert [(item.paragraph_index, item.catalog_index) for item in ordered] == [(5, 9), (1, 2), (1, 3), (2, 0)]


def test_each_page_and_paragraph_used_once(engine_config):
    spans = _spans([100, 400, 700, 1000])
    candidates = [
        _candidate(0, 0, 90.0),
        _candidate(1, 0, 85.0),  # page already used
        _candidate(0, 1, 80.0),  # paragraph already used
        _candidate(2, 1, 70.0),
    ]

    decisions = select_candidates(candidates, spans, 10, engine_config)

    assert [(item.paragraph_index, item.target_url) for item in decisions] == [
        (0, "https://example.com/page-0"),
        (2, "https://example.com/page-1"),
    ]


def test_spacing_is_measured_from_the_last_accepted_link(engine_config):
    spans = _spans([100, 600, 620])
    candidates = [
        _candidate(1, 1, 90.0),
        _candidate(0, 0, 85.0),  # 500 words before paragraph 1
        _candidate(2, 2, 80.0),  # only 20 words after paragraph 1
    ]

    decisions = select_candidates(candidates, spans, 10, engine_config)

    assert [item.paragraph_index for item in decisions] == [1]


def test_earlier_paragraphs_are_closed_once_a_later_link_is_accepted(engine_config):
    spans = _spans([100, 600, 900])
    candidates = [_candidate(1, 1, 90.0), _candidate(0, 0, 85.0), _candidate(2, 2, 80.0)]

    decisions = select_candidates(candidates, spans, 10, engine_config)

    assert [item.paragraph_index for item in decisions] == [1, 2]


def test_spacing_threshold_is_configurable(engine_config):
    engine_config.raw["min_link_spacing_words"] = 10
    spans = _spans([100, 600, 620])
    candidates = [_candidate(1, 1, 90.0), _candidate(0, 0, 85.0), _candidate(2, 2, 80.0)]

    decisions = select_candidates(candidates, spans, 10, engine_config)

    assert [item.paragraph_index for item in decisions] == [1, 2]


def test_budget_caps_accepted_links(engine_config):
    spans = _spans([300, 600, 900])
    candidates = [_candidate(index, index, 60.0 - index) for index in range(3)]

    decisions = select_candidates(candidates, spans, 2, engine_config)

    assert [item.paragraph_index for item in decisions] == [0, 1]


def test_scores_are_clamped_for_display(engine_config):
    decisions = select_candidates([_candidate(0, 0, 140.0)], _spans([50]), 5, engine_config)

    assert decisions[0].score == 100.0
    assert clamp_score(-4.0) == 0.0
    assert clamp_score(42.5) == 42.5
