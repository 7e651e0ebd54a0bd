"""Greedy, constraint-respecting selection of the final links."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .config import EngineConfig
from .types import AnchorCandidate, LinkDecision, ParagraphSpan

logger = logging.getLogger(__name__)


def clamp_score(score: float, maximum: float = 100.0) -> float:
    """Clamp a raw candidate score to the display range ``[0, maximum]``."""

    return max(0.0, min(float(score), maximum))


def rank_candidates(candidates: Sequence[AnchorCandidate]) -> List[AnchorCandidate]:
    """Order by score, then document position, then catalog position."""

    return sorted(
        candidates,
        key=lambda candidate: (-candidate.score, candidate.paragraph_index, candidate.catalog_index),
    )


def select_candidates(
    candidates: Sequence[AnchorCandidate],
    spans: Sequence[ParagraphSpan],
    max_links: int,
    config: EngineConfig,
) -> List[LinkDecision]:
    """Pick the links to insert.

    A candidate is accepted only when its target page and its paragraph are
    both unused and its paragraph starts at least ``min_link_spacing_words``
    cumulative words after the paragraph of the last accepted link. The
    distance is signed, so nothing before the last accepted link is taken.
    The result keeps acceptance order (best score first).
    """

    if max_links <= 0 or not candidates:
        return []

    cumulative: Dict[int, int] = {span.index: span.cumulative_word_count for span in spans}
    spacing = config.min_link_spacing_words
    maximum = float(config.get("max_display_score", 100.0))

    used_urls: set[str] = set()
    used_paragraphs: set[int] = set()
    last_position: int | None = None
    decisions: List[LinkDecision] = []

    for candidate in rank_candidates(candidates):
        if len(decisions) >= max_links:
            break
        if candidate.page.url in used_urls:
            continue
        if candidate.paragraph_index in used_paragraphs:
            continue
        position = cumulative.get(candidate.paragraph_index, 0)
        if last_position is not None and position - last_position < spacing:
            continue

        decisions.append(
            LinkDecision(
                anchor_text=candidate.anchor_text,
                target_url=candidate.page.url,
                context_snippet=candidate.context_snippet,
                score=clamp_score(candidate.score, maximum),
                paragraph_index=candidate.paragraph_index,
            )
        )
        used_urls.add(candidate.page.url)
        used_paragraphs.add(candidate.paragraph_index)
        last_position = position

    logger.debug("Selected %d of %d candidates", len(decisions), len(candidates))
    return decisions
