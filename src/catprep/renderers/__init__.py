"""
Renderers turning cat context entities into render sites.

Each renderer loads Jinja2 templates from ``catprep/templates`` (or a
configured directory) and returns a :class:`RenderSite`.
"""

from catprep.renderers.base import (
    Append,
    BaseRenderer,
    Prepend,
    RenderDirective,
    RenderSite,
    ReplacePage,
    Wrap,
)
from catprep.renderers.teacher import TeacherListRenderer, TeacherRenderer
from catprep.renderers.subject import SubjectRenderer
from catprep.renderers.article import ArticleRenderer
from catprep.renderers.tags import TagIndexRenderer

__all__ = [
    "Append",
    "BaseRenderer",
    "Prepend",
    "RenderDirective",
    "RenderSite",
    "ReplacePage",
    "Wrap",
    "TeacherRenderer",
    "TeacherListRenderer",
    "SubjectRenderer",
    "ArticleRenderer",
    "TagIndexRenderer",
]
