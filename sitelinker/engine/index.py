"""Coordinator for the link placement pipeline."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, List, Sequence

from . import anchors as anchors_module
from . import catalog as catalog_module
from . import injection as injection_module
from . import selection as selection_module
from .. import settings
from .config import EngineConfig
from .paragraphs import extract_paragraphs
from .text import Stemmer, stems
from .types import LinkDecision, SitePage

logger = logging.getLogger(__name__)


class LinkEngine:
    """Finds and inserts internal links against a replaceable page catalog."""

    def __init__(
        self,
        pages: Iterable[SitePage] | None = None,
        config: EngineConfig | None = None,
        stemmer: Stemmer = stems,
    ) -> None:
        self.config = config or settings.engine_config()
        self.stemmer = stemmer
        self.catalog = catalog_module.SiteCatalog(pages)

    def set_catalog(self, pages: Iterable[SitePage] | None) -> None:
        """Replace the destination catalog wholesale."""

        self.catalog.replace(pages)

    update_site_pages = set_catalog

    def find_link_opportunities(self, html: str, max_links: int | None = None) -> List[LinkDecision]:
        """Return the links worth inserting into ``html``, best first."""

        pages = self.catalog.snapshot()
        if not pages:
            logger.info("No site pages available; skipping internal links")
            return []

        limit = self.config.max_links if max_links is None else max_links
        if limit <= 0:
            return []

        spans = extract_paragraphs(html)
        if not spans:
            logger.info("No paragraphs found; skipping internal links")
            return []

        logger.info("Scanning %d paragraphs for links to %d pages", len(spans), len(pages))
        candidates = anchors_module.generate_candidates(spans, pages, self.config, self.stemmer)
        decisions = selection_module.select_candidates(candidates, spans, limit, self.config)

        logger.info("Found %d internal link opportunities", len(decisions))
        for decision in decisions:
            logger.debug("  %r -> %s (%.1f)", decision.anchor_text, decision.target_url, decision.score)
        return decisions

    def inject_links(self, html: str, decisions: Sequence[LinkDecision]) -> str:
        return injection_module.inject_links(html, decisions, self.config)

    def count_existing_links(self, html: str) -> int:
        return injection_module.count_existing_links(html)

    def topic_clusters(self) -> Dict[str, List[SitePage]]:
        return catalog_module.identify_topic_clusters(self.catalog.snapshot())

    def related_pages(self, url: str, limit: int = 10) -> List[SitePage]:
        return catalog_module.related_pages(self.catalog.snapshot(), url, limit=limit)


def create_link_engine(
    pages: Iterable[SitePage] | None = None,
    config: EngineConfig | None = None,
) -> LinkEngine:
    return LinkEngine(pages, config)


def dry_run(
    documents: Sequence[str],
    pages: Sequence[SitePage],
    config: EngineConfig | None = None,
    max_links: int | None = None,
) -> Dict[str, float | Dict[str, int]]:
    """Return diagnostic metrics for linking a batch of documents."""

    engine = LinkEngine(pages, config)
    total_documents = len(documents) or 1
    documents_with_links = 0
    inbound_counts: Counter[str] = Counter({page.url: 0 for page in pages})
    scores: List[float] = []

    for html in documents:
        decisions = engine.find_link_opportunities(html, max_links)
        if decisions:
            documents_with_links += 1
        for decision in decisions:
            inbound_counts[decision.target_url] += 1
            scores.append(decision.score)

    total_links = len(scores)
    orphans = sum(1 for count in inbound_counts.values() if count == 0)
    return {
        "coverage": documents_with_links / total_documents,
        "links_per_document": total_links / total_documents,
        "mean_score_selected": sum(scores) / total_links if total_links else 0.0,
        "orphan_rate": orphans / (len(inbound_counts) or 1),
        "target_counts": {url: count for url, count in inbound_counts.items() if count},
    }
