"""
Teacher profile and roster renderers.

Both target the synthetic teachers page and append to it: first the
roster of anchor links, then one profile per teacher.
"""

from __future__ import annotations

from collections.abc import Sequence

from catprep.models import Teacher, TeacherCard
from catprep.renderers.base import Append, BaseRenderer, RenderSite


class TeacherRenderer(BaseRenderer[Teacher]):
    """Render a teacher's profile with their subjects and articles.

    Features:
        - Heading anchored by username (roster and article links land here)
        - Email and username
        - Bio as Markdown
        - Links to every subject and article attributed to the teacher
    """

    template_name = "teacher.md.j2"

    def render(self, entity: Teacher) -> RenderSite:
        text = self._render_template(self.template_name, teacher=entity)
        return RenderSite(self.settings.teachers_page, Append(text))


class TeacherListRenderer(BaseRenderer[Sequence[TeacherCard]]):
    """Render the roster line linking to every teacher's profile."""

    template_name = "teacher_list.md.j2"

    def render(self, entity: Sequence[TeacherCard]) -> RenderSite:
        text = self._render_template(self.template_name, teachers=list(entity))
        return RenderSite(self.settings.teachers_page, Append(text))
