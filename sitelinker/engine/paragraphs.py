"""Paragraph scanning over raw article HTML."""

from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup  # type: ignore

from .text import collapse_whitespace
from .types import ParagraphSpan

_PARAGRAPH_RE = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p\s*>", re.IGNORECASE | re.DOTALL)
_ANCHOR_TAG_RE = re.compile(r"<a[\s>]", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")

# Elements whose boundaries separate words; inline tags join their text
_SEPARATING_TAGS = [
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hr", "li", "ol", "pre", "section", "table", "td", "th", "tr", "ul",
]


def fragment_text(fragment: str) -> str:
    """Return the plain text of an HTML fragment with whitespace collapsed.

    ``sour<b>dough</b>`` reads as one word; ``<br>`` and block-level
    elements act as word breaks.
    """

    if not fragment:
        return ""
    if "<" not in fragment and "&" not in fragment:
        return collapse_whitespace(fragment)
    soup = BeautifulSoup(fragment, "html.parser")
    for tag in soup.find_all(_SEPARATING_TAGS):
        tag.insert_before(" ")
        tag.insert_after(" ")
    return collapse_whitespace(soup.get_text())



def contains_link(fragment: str) -> bool:
    return bool(_ANCHOR_TAG_RE.search(fragment or ""))


def tag_spans(fragment: str, offset: int = 0) -> List[tuple[int, int]]:
    """Return ``(start, end)`` ranges of every tag in the fragment."""

    return [(match.start() + offset, match.end() + offset) for match in _TAG_RE.finditer(fragment)]


def extract_paragraphs(html: str | None) -> List[ParagraphSpan]:
    """Return paragraph spans in document order.

    Unterminated or stray paragraph tags are skipped; nothing here raises for
    odd markup. Short paragraphs are kept so cumulative word counts stay
    true to the document.
    """

    if not html:
        return []

    spans: List[ParagraphSpan] = []
    cumulative = 0
    for match in _PARAGRAPH_RE.finditer(html):
        inner = match.group(1)
        text = fragment_text(inner)
        word_count = len(text.split())
        cumulative += word_count
        spans.append(
            ParagraphSpan(
                index=len(spans),
                text=text,
                word_count=word_count,
                cumulative_word_count=cumulative,
                has_existing_link=contains_link(inner),
                start=match.start(),
                end=match.end(),
                inner_start=match.start(1),
                inner_end=match.end(1),
            )
        )
    return spans
