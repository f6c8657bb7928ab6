"""
Tag index over article cards.

``index_tags`` groups cards by tag in processing order. ``tag_listing``
turns that mapping into the alphabetical list the tag page renders.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from catprep.models import ArticleCard


@dataclass(frozen=True)
class Tag:
    """A tag and every article card carrying it."""

    name: str
    articles: tuple[ArticleCard, ...]


def index_tags(cards: Iterable[ArticleCard]) -> Mapping[str, tuple[ArticleCard, ...]]:
    """Map each tag to the cards carrying it.

    Cards keep the order they were given in. A card listing the same tag
    twice appears twice under it.

    Args:
        cards: Article cards in processing order

    Returns:
        Read-only mapping of tag name to cards
    """
    index: dict[str, list[ArticleCard]] = {}
    for card in cards:
        for tag in card.tags:
            index.setdefault(tag, []).append(card)
    return MappingProxyType({tag: tuple(found) for tag, found in index.items()})


def tag_listing(tags: Mapping[str, Iterable[ArticleCard]]) -> list[Tag]:
    """Tags sorted by name, for deterministic rendering."""
    return [Tag(name=name, articles=tuple(tags[name])) for name in sorted(tags)]


__all__ = ["Tag", "index_tags", "tag_listing"]
