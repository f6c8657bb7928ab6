"""Article page renderer."""

from __future__ import annotations

from catprep.models import Article
from catprep.renderers.base import BaseRenderer, RenderSite, Wrap


class ArticleRenderer(BaseRenderer[Article]):
    """Wrap an article in its metadata table and tag links.

    Features:
        - Author and last modifier, linked when they resolved to teachers
        - Last-modified timestamp from git
        - Link back to the owning subject
        - Optional date from the header
        - Tag links into the tag index page
        - Disqus comment thread when a shortname is configured
    """

    pre_template = "article_pre.md.j2"
    post_template = "article_post.md.j2"

    def render(self, entity: Article) -> RenderSite:
        pre = self._render_template(self.pre_template, article=entity)
        post = self._render_template(self.post_template, article=entity)
        return RenderSite(entity.path, Wrap(pre, post))
