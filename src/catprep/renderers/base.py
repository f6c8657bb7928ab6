"""
Base renderer and render sites.

A renderer turns one graph entity into a :class:`RenderSite`: the chapter
path to patch plus a directive saying how the rendered text combines with
the chapter's content.

Architecture:
    ```
    CatContext entity ──► Renderer.render()
                               │
                               ▼
                         Jinja2 template(s)
                               │
                               ▼
               RenderSite(site, Prepend | Append | Wrap | ReplacePage)
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from catprep.config import CatPrepSettings
from catprep.errors import TemplateRenderError

T = TypeVar("T")

DEFAULT_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


class RenderDirective(ABC):
    """How rendered text is combined with a chapter's content.

    ``str()`` gives only the directive's kind, so error messages never
    carry rendered text.
    """

    @abstractmethod
    def apply(self, content: str) -> str:
        """Return the new chapter content."""

    def __str__(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Prepend(RenderDirective):
    text: str

    def apply(self, content: str) -> str:
        return f"{self.text}\n{content}"


@dataclass(frozen=True)
class Append(RenderDirective):
    text: str

    def apply(self, content: str) -> str:
        return f"{content}\n{self.text}"


@dataclass(frozen=True)
class Wrap(RenderDirective):
    pre: str
    post: str

    def apply(self, content: str) -> str:
        return f"{self.pre}\n{content}\n{self.post}"


@dataclass(frozen=True)
class ReplacePage(RenderDirective):
    text: str

    def apply(self, content: str) -> str:
        return self.text


@dataclass(frozen=True)
class RenderSite:
    """A pending patch: which chapter, and what to do with it."""

    site: str
    directive: RenderDirective


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


class BaseRenderer(ABC, Generic[T]):
    """Base class for entity renderers.

    Sets up the Jinja2 environment shared by all renderers. Templates see
    ``teachers_page`` and ``tags_page`` as globals for cross-page links, and
    ``disqus_shortname`` for the article comment thread.

    Args:
        settings: Preprocessor settings
        template_dir: Template directory (settings or bundled if None)
    """

    def __init__(
        self,
        settings: CatPrepSettings | None = None,
        template_dir: Path | None = None,
    ):
        self.settings = settings or CatPrepSettings()

        if template_dir is None:
            template_dir = self.settings.template_dir or DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(['html', 'xml']),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals["teachers_page"] = self.settings.teachers_page
        self.env.globals["tags_page"] = self.settings.tags_page
        self.env.globals["disqus_shortname"] = self.settings.disqus_shortname

    @abstractmethod
    def render(self, entity: T) -> RenderSite:
        """Render an entity.

        Raises:
            TemplateRenderError: If a template fails to load or render.
        """

    def _render_template(self, template_name: str, **data: Any) -> str:
        """Render one template, converting engine failures."""
        try:
            return self.env.get_template(template_name).render(**data)
        except TemplateError as e:
            raise TemplateRenderError(str(e)) from None


__all__ = [
    "DEFAULT_TEMPLATE_DIR",
    "RenderDirective",
    "Prepend",
    "Append",
    "Wrap",
    "ReplacePage",
    "RenderSite",
    "BaseRenderer",
]
