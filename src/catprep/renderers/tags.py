"""Tag index page renderer."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from catprep.models import ArticleCard
from catprep.renderers.base import BaseRenderer, RenderSite, ReplacePage
from catprep.tags import tag_listing


class TagIndexRenderer(BaseRenderer[Mapping[str, Iterable[ArticleCard]]]):
    """Replace the tags page with every tag and its articles, A to Z."""

    template_name = "tags.md.j2"

    def render(self, entity: Mapping[str, Iterable[ArticleCard]]) -> RenderSite:
        text = self._render_template(self.template_name, tags=tag_listing(entity))
        return RenderSite(self.settings.tags_page, ReplacePage(text))
