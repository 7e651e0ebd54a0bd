"""Site page catalog held by the engine, plus catalog-level helpers."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from .text import STOP_WORDS
from .types import SitePage

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"


class SiteCatalog:
    """Immutable snapshot of the destination pages behind a single reference.

    ``replace`` builds a new tuple and swaps the reference; tuples handed out
    by ``snapshot`` are never mutated, so readers holding one keep a
    consistent view while the catalog is replaced.
    """

    def __init__(self, pages: Iterable[SitePage] | None = None) -> None:
        self._pages: Tuple[SitePage, ...] = tuple(pages or ())

    def replace(self, pages: Iterable[SitePage] | None) -> None:
        self._pages = tuple(pages or ())
        logger.info("Catalog updated with %d site pages", len(self._pages))

    def snapshot(self) -> Tuple[SitePage, ...]:
        return self._pages

    def __len__(self) -> int:
        return len(self._pages)


def identify_topic_clusters(pages: Iterable[SitePage]) -> Dict[str, List[SitePage]]:
    """Group pages by category, keeping catalog order inside each group."""

    clusters: Dict[str, List[SitePage]] = {}
    for page in pages:
        clusters.setdefault(page.category or DEFAULT_CATEGORY, []).append(page)
    return clusters


def page_similarity(first: SitePage, second: SitePage) -> float:
    score = 0.0
    if first.category and first.category == second.category:
        score += 40
    if first.keywords and second.keywords:
        shared = {keyword.lower() for keyword in first.keywords} & {keyword.lower() for keyword in second.keywords}
        score += 15 * len(shared)
    first_words = {word for word in first.title.lower().split() if word not in STOP_WORDS}
    second_words = {word for word in second.title.lower().split() if word not in STOP_WORDS}
    score += 10 * len(first_words & second_words)
    return score


def related_pages(
    pages: Iterable[SitePage],
    url: str,
    limit: int = 10,
    min_score: float = 30.0,
) -> List[SitePage]:
    """Return the pages most similar to the page at ``url``, best first."""

    catalog = list(pages)
    current = next((page for page in catalog if page.url == url), None)
    if current is None:
        return []

    scored = []
    for position, page in enumerate(catalog):
        if page.url == url:
            continue
        score = page_similarity(current, page)
        if score > min_score:
            scored.append((-score, position, page))
    scored.sort(key=lambda item: (item[0], item[1]))
    return [page for _, _, page in scored[:limit]]
