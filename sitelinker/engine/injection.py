"""Rewriting article HTML to carry the selected links."""

from __future__ import annotations

import html as html_lib
import logging
import re
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup  # type: ignore

from .. import settings
from .config import EngineConfig
from .paragraphs import extract_paragraphs, tag_spans
from .text import collapse_whitespace
from .types import LinkDecision, ParagraphSpan

logger = logging.getLogger(__name__)

# Word boundary template used when compiling anchor matchers
WORD_BOUNDARY = r"(?<![A-Za-z0-9_]){term}(?![A-Za-z0-9_])"


def anchor_pattern(anchor: str) -> re.Pattern[str]:
    """Compile a case-insensitive, whole-word matcher for ``anchor``.

    Internal whitespace matches any run of whitespace so anchors taken from
    collapsed paragraph text still find line-wrapped source HTML.
    """

    term = r"\s+".join(re.escape(word) for word in anchor.split())
    return re.compile(WORD_BOUNDARY.format(term=term), flags=re.IGNORECASE)


def build_link(url: str, text: str, title: Optional[str] = None) -> str:
    href = html_lib.escape(url, quote=True)
    if title:
        return f'<a href="{href}" title="{html_lib.escape(title, quote=True)}">{text}</a>'
    return f'<a href="{href}">{text}</a>'


def _paragraph_order(spans: Sequence[ParagraphSpan], hint: int) -> List[ParagraphSpan]:
    hinted = [span for span in spans if span.index == hint]
    return hinted + [span for span in spans if span.index != hint]


def _inject_one(document: str, decision: LinkDecision, anchor: str, config: EngineConfig) -> Optional[str]:
    pattern = anchor_pattern(anchor)
    template = config.get("link_title_template")

    for span in _paragraph_order(extract_paragraphs(document), decision.paragraph_index):
        if span.has_existing_link:
            continue
        inner = document[span.inner_start : span.inner_end]
        tags = tag_spans(inner)
        for match in pattern.finditer(inner):
            if any(match.start() < tag_end and tag_start < match.end() for tag_start, tag_end in tags):
                continue
            title = template.format(anchor=anchor) if template else None
            link = build_link(decision.target_url, match.group(0), title)
            start = span.inner_start + match.start()
            end = span.inner_start + match.end()
            return document[:start] + link + document[end:]
    return None


def inject_links(
    html: str,
    decisions: Sequence[LinkDecision],
    config: EngineConfig | None = None,
) -> str:
    """Wrap each decision's anchor phrase in a link and return the new HTML.

    Every decision is located against the document as already rewritten by
    the decisions before it. Decisions whose anchor cannot be found in an
    unlinked paragraph are skipped.
    """

    if not html or not decisions:
        return html

    engine_config = config or settings.engine_config()
    document = html
    applied = 0
    for decision in decisions:
        anchor = collapse_whitespace(decision.anchor_text)
        if len(anchor) < engine_config.min_anchor_chars or not decision.target_url:
            logger.debug("Rejected unsafe anchor %r -> %s", decision.anchor_text, decision.target_url)
            continue
        rewritten = _inject_one(document, decision, anchor, engine_config)
        if rewritten is None:
            logger.debug("Anchor %r not found in an unlinked paragraph; skipping", anchor)
            continue
        document = rewritten
        applied += 1
        logger.debug("Linked %r -> %s", anchor, decision.target_url)

    logger.info("Injected %d/%d internal links", applied, len(decisions))
    return document


def count_existing_links(html: str | None) -> int:
    """Return the number of ``<a>`` elements in the HTML."""

    if not html:
        return 0
    soup = BeautifulSoup(html, "html.parser")
    return len(soup.find_all("a"))


def strip_links(html: str) -> str:
    """Remove anchor tags from ``html`` while preserving their inner content."""

    if not html:
        return html

    soup = BeautifulSoup(html, "html.parser")
    for anchor in soup.find_all("a"):
        anchor.unwrap()
    return str(soup)
