"""Subject page renderer."""

from __future__ import annotations

from catprep.models import Subject
from catprep.renderers.base import BaseRenderer, RenderSite, Wrap


class SubjectRenderer(BaseRenderer[Subject]):
    """Wrap a subject page in its info table and article list.

    The owner links to the teachers page when it resolved to a teacher,
    otherwise the raw owner string from the header is shown.
    """

    pre_template = "subject_pre.md.j2"
    post_template = "subject_post.md.j2"

    def render(self, entity: Subject) -> RenderSite:
        pre = self._render_template(self.pre_template, subject=entity)
        post = self._render_template(self.post_template, subject=entity)
        return RenderSite(entity.path, Wrap(pre, post))
