"""Typed data structures used by the link placement pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class SitePage:
    """Crawlable destination page that anchors may point to."""

    url: str
    title: str
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    slug: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class ParagraphSpan:
    """A ``<p>`` block located in the source HTML.

    ``start``/``end`` cover the whole block including its tags while
    ``inner_start``/``inner_end`` cover only the paragraph body.
    """

    index: int
    text: str
    word_count: int
    cumulative_word_count: int
    has_existing_link: bool
    start: int
    end: int
    inner_start: int
    inner_end: int


@dataclass(frozen=True)
class AnchorCandidate:
    """Scored anchor proposal for a single (paragraph, page) pairing."""

    anchor_text: str
    page: SitePage
    score: float
    paragraph_index: int
    catalog_index: int
    context_snippet: str
    source: str = "window"


@dataclass(frozen=True)
class LinkDecision:
    """Anchor that survived selection and should be inserted into the HTML."""

    anchor_text: str
    target_url: str
    context_snippet: str
    score: float
    paragraph_index: int = -1
