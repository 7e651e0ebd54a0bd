"""Shared fixtures for link engine tests."""

from __future__ import annotations

from itertools import cycle, islice
from typing import Iterable, Sequence

import pytest

from sitelinker.engine.config import load_config
from sitelinker.engine.types import SitePage

SOURDOUGH_TEXT = "The complete guide to sourdough baking requires patience and the right flour"
ESPRESSO_TEXT = (
    "Choosing among espresso grinder reviews helps home baristas dial in a balanced morning shot every day"
)
KAYAK_TEXT = (
    "Calm lakes are perfect for practicing kayak paddling techniques before tackling faster rivers later this season"
)

_FILLER_WORDS = ("quiet", "lantern", "meadow", "harbor", "willow", "candle", "orchard", "pebble")


@pytest.fixture()
def engine_config():
    """Provide a mutable copy of the default engine configuration."""

    return load_config(None)


@pytest.fixture()
def catalog():
    return [
        make_page("https://example.com/guides/sourdough-baking", "Sourdough Baking Guide"),
        make_page("https://example.com/reviews/espresso-grinders", "Espresso Grinder Reviews"),
        make_page("https://example.com/outdoors/kayak-paddling", "Kayak Paddling Techniques"),
    ]


def make_page(
    url: str,
    title: str,
    *,
    keywords: Iterable[str] | None = None,
    slug: str | None = None,
    category: str | None = None,
) -> SitePage:
    return SitePage(
        url=url,
        title=title,
        keywords=tuple(keywords or ()),
        slug=slug,
        category=category,
    )


def filler(words: int) -> str:
    """Return ``words`` neutral words that match no catalog page."""

    return " ".join(islice(cycle(_FILLER_WORDS), words))


def make_html(paragraphs: Sequence[str]) -> str:
    return "\n".join(f"<p>{text}</p>" for text in paragraphs)
