"""Helpers for turning sitemap data into a site page catalog.

These functions convert sitemap text the caller has already obtained into
:class:`~sitelinker.engine.types.SitePage` records for the link engine.
They handle standard ``<urlset>`` sitemaps, ``<sitemapindex>`` files and
plain URL listings, and derive slugs and readable titles from URLs.
Nothing here performs network access.
"""

from __future__ import annotations

import re
from typing import List, Tuple
from urllib.parse import urlparse
from xml.etree import ElementTree

from .engine.types import SitePage

_URL_RE = re.compile(r"https?://[^\s<>()\[\]\"']+", re.IGNORECASE)
_SLUG_UNSAFE_RE = re.compile(r"[^a-z0-9\s-]")
MAX_SLUG_LENGTH = 60
MAX_LISTING_URLS = 50_000


def normalize_slug_from_url(url: str) -> Tuple[str, str]:
    """Derive a raw and normalized slug from a URL path segment.

    The raw slug is the final non-empty segment of the URL path with
    trailing slashes removed. The normalised slug converts hyphens and
    underscores to spaces and lowercases the string for keyword matching.
    An unparsable URL yields two empty strings.
    """

    try:
        parsed = urlparse(url)
    except ValueError:
        return "", ""
    path = parsed.path.rstrip("/")
    raw = path.split("/")[-1] if path else ""
    normalized = raw.replace("-", " ").replace("_", " ").lower()
    return raw, normalized


def safe_slug(text: str) -> str:
    """Return a lowercase, hyphenated slug of at most 60 characters."""

    slug = (text or "").strip().lower().lstrip("/")
    slug = _SLUG_UNSAFE_RE.sub("", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug[:MAX_SLUG_LENGTH]


def title_from_slug(slug: str) -> str:
    """Turn ``best-sourdough_starter`` into ``Best Sourdough Starter``."""

    words = slug.replace("-", " ").replace("_", " ").split()
    return " ".join(word.capitalize() for word in words)


def urls_from_listing(text: str, limit: int = MAX_LISTING_URLS) -> List[str]:
    """Extract unique http(s) URLs from a plain-text or markdown listing."""

    urls: List[str] = []
    seen: set[str] = set()
    for match in _URL_RE.finditer(text or ""):
        url = match.group(0).rstrip("),.;")
        if not url or url in seen:
            continue
        seen.add(url)
        urls.append(url)
        if len(urls) >= limit:
            break
    return urls


def parse_sitemap(xml_text: str) -> List[str]:
    """Parse a sitemap document and return the URLs it lists.

    Both ``<urlset>`` sitemaps and ``<sitemapindex>`` files are accepted;
    for an index the child sitemap locations are returned, since fetching
    them is left to the caller. Text that is not XML is treated as a URL
    listing.
    """

    try:
        root = ElementTree.fromstring(xml_text)
    except ElementTree.ParseError:
        return urls_from_listing(xml_text)

    urls: List[str] = []
    # Collect all <loc> tags regardless of namespace
    for loc in root.findall(".//{*}loc"):
        url = (loc.text or "").strip()
        if url:
            urls.append(url)
    return urls


def pages_from_sitemap(xml_text: str) -> List[SitePage]:
    """Build a catalog with one page per unique sitemap URL.

    Titles and slugs are derived from the final path segment; URLs without
    one (such as the site root) are skipped.
    """

    pages: List[SitePage] = []
    seen: set[str] = set()
    for url in parse_sitemap(xml_text):
        if url in seen:
            continue
        seen.add(url)
        raw, normalized = normalize_slug_from_url(url)
        if not raw:
            continue
        pages.append(SitePage(url=url, title=title_from_slug(raw), slug=safe_slug(normalized)))
    return pages
