"""Anchor phrase discovery and scoring."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set
from urllib.parse import urlparse

from .config import EngineConfig
from .text import Stemmer, STOP_WORDS, is_stop_word, stems, strip_edge_punctuation
from .types import AnchorCandidate, ParagraphSpan, SitePage

logger = logging.getLogger(__name__)

_FORBIDDEN_RE = re.compile(r"[<>{}\[\]|\\^]")
_SENTENCE_END_RE = re.compile(r"[.!?;:]['\")\]]*$")
_SLUG_SPLIT_RE = re.compile(r"[-_]+")


@dataclass(frozen=True)
class _PageTerms:
    target: Set[str]
    title: Set[str]


def slug_keywords(page: SitePage) -> List[str]:
    """Return meaningful words from the page slug (explicit or from the URL)."""

    raw = page.slug
    if not raw:
        try:
            path = urlparse(page.url).path
        except ValueError:
            logger.debug("Ignoring slug keywords for unparsable URL %r", page.url)
            return []
        segments = [segment for segment in path.split("/") if segment]
        raw = segments[-1] if segments else ""
    words = []
    for word in _SLUG_SPLIT_RE.split(raw.lower()):
        if len(word) > 3 and word not in STOP_WORDS:
            words.append(word)
    return words


def _page_terms(page: SitePage, stemmer: Stemmer) -> _PageTerms:
    title = stemmer(page.title or "")
    target = set(title)
    for keyword in page.keywords or ():
        target |= stemmer(keyword)
    for word in slug_keywords(page):
        target |= stemmer(word)
    return _PageTerms(target=target, title=title)


def target_terms(page: SitePage, stemmer: Stemmer = stems) -> Set[str]:
    """Stems of the page title, keywords and slug."""

    return set(_page_terms(page, stemmer).target)


def context_snippet(text: str, start: int, end: int, window: int = 60) -> str:
    """Return the text surrounding ``text[start:end]``, marked when truncated."""

    lo = max(0, start - window)
    hi = min(len(text), end + window)
    snippet = text[lo:hi].strip()
    if lo > 0:
        snippet = "…" + snippet
    if hi < len(text):
        snippet = snippet + "…"
    return snippet


def best_anchor(
    span: ParagraphSpan,
    page: SitePage,
    catalog_index: int,
    config: EngineConfig,
    stemmer: Stemmer = stems,
    terms: Optional[_PageTerms] = None,
) -> Optional[AnchorCandidate]:
    """Return the best anchor for ``page`` inside ``span`` or ``None``."""

    if span.has_existing_link or span.word_count < config.min_paragraph_words:
        return None

    terms = terms or _page_terms(page, stemmer)
    if not terms.target:
        return None

    window_candidate = _best_window(span, page, catalog_index, config, stemmer, terms)
    if window_candidate is not None and window_candidate.score > float(config.get("window_score_floor", 15.0)):
        return window_candidate
    return _title_fallback(span, page, catalog_index, config)


def _best_window(
    span: ParagraphSpan,
    page: SitePage,
    catalog_index: int,
    config: EngineConfig,
    stemmer: Stemmer,
    terms: _PageTerms,
) -> Optional[AnchorCandidate]:
    words = span.text.split()
    if not words:
        return None

    word_stems = [stemmer(word) for word in words]
    stop_flags = [is_stop_word(word) for word in words]
    sentence_ends = [bool(_SENTENCE_END_RE.search(word)) for word in words]
    offsets = []
    cursor = 0
    for word in words:
        offsets.append(cursor)
        cursor += len(word) + 1

    min_words = int(config.get("min_window_words", 3))
    max_words = int(config.get("max_window_words", 7))
    ratio_weight = float(config.get("ratio_weight", 40.0))
    overlap_weight = float(config.get("overlap_weight", 8.0))
    title_weight = float(config.get("title_weight", 5.0))

    best: Optional[AnchorCandidate] = None
    for start in range(len(words)):
        if stop_flags[start]:
            continue
        for size in range(min_words, max_words + 1):
            end = start + size
            if end > len(words):
                break
            if stop_flags[end - 1]:
                continue
            if any(sentence_ends[start : end - 1]):
                # windows may not run across a sentence or clause break
                break

            window_stems: Set[str] = set()
            for item in word_stems[start:end]:
                window_stems |= item
            if not window_stems:
                continue
            overlap = len(window_stems & terms.target)
            if overlap == 0:
                continue

            raw = " ".join(words[start:end])
            anchor = strip_edge_punctuation(raw)
            if len(anchor) < config.min_anchor_chars or _FORBIDDEN_RE.search(anchor):
                continue

            ratio = overlap / len(window_stems)
            title_overlap = len(window_stems & terms.title)
            score = (
                ratio * ratio_weight
                + overlap * overlap_weight
                + config.length_bonus(size)
                + title_overlap * title_weight
            )
            if best is not None and score <= best.score:
                continue

            anchor_start = offsets[start] + raw.find(anchor)
            best = AnchorCandidate(
                anchor_text=anchor,
                page=page,
                score=score,
                paragraph_index=span.index,
                catalog_index=catalog_index,
                context_snippet=context_snippet(
                    span.text,
                    anchor_start,
                    anchor_start + len(anchor),
                    int(config.get("snippet_window", 60)),
                ),
                source="window",
            )
    return best


def _title_fallback(
    span: ParagraphSpan,
    page: SitePage,
    catalog_index: int,
    config: EngineConfig,
) -> Optional[AnchorCandidate]:
    title_words = [strip_edge_punctuation(word) for word in (page.title or "").split()]
    title_words = [word for word in title_words if word]
    max_words = int(config.get("fallback_max_words", 4))
    min_words = int(config.get("fallback_min_words", 2))
    word_score = float(config.get("fallback_word_score", 5.0))
    min_score = float(config.get("fallback_min_score", 10.0))

    for size in range(min(max_words, len(title_words)), min_words - 1, -1):
        score = size * word_score
        if score < min_score:
            break
        for start in range(len(title_words) - size + 1):
            run = title_words[start : start + size]
            if is_stop_word(run[0]) or is_stop_word(run[-1]):
                continue
            pattern = r"(?<!\w)" + r"\s+".join(re.escape(word) for word in run) + r"(?!\w)"
            match = re.search(pattern, span.text, flags=re.IGNORECASE)
            if not match:
                continue
            anchor = match.group(0)
            if len(anchor) < config.min_anchor_chars:
                continue
            return AnchorCandidate(
                anchor_text=anchor,
                page=page,
                score=score,
                paragraph_index=span.index,
                catalog_index=catalog_index,
                context_snippet=context_snippet(
                    span.text,
                    match.start(),
                    match.end(),
                    int(config.get("snippet_window", 60)),
                ),
                source="title",
            )
    return None


def generate_candidates(
    spans: Sequence[ParagraphSpan],
    pages: Sequence[SitePage],
    config: EngineConfig,
    stemmer: Stemmer = stems,
) -> List[AnchorCandidate]:
    """Return at most one candidate for every eligible (paragraph, page) pair."""

    eligible = [
        span
        for span in spans
        if not span.has_existing_link and span.word_count >= config.min_paragraph_words
    ]
    if not eligible or not pages:
        return []

    page_terms = [_page_terms(page, stemmer) for page in pages]
    candidates: List[AnchorCandidate] = []
    for span in eligible:
        for catalog_index, page in enumerate(pages):
            candidate = best_anchor(span, page, catalog_index, config, stemmer, page_terms[catalog_index])
            if candidate is not None:
                candidates.append(candidate)
    logger.debug(
        "Generated %d anchor candidates from %d paragraphs and %d pages",
        len(candidates),
        len(eligible),
        len(pages),
    )
    return candidates
