"""
Producing render sites and applying them to the book.

``create_renders`` runs every renderer over a :class:`CatContext` and adds
the synthetic teachers and tags pages to the book. ``execute_renders``
then walks the book once, patching each chapter with the sites aimed at
it. A site whose chapter never shows up is an orphan and fails the run:
it almost always means a renamed document or a wrong configured path.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from catprep.book import Book, Chapter
from catprep.config import CatPrepSettings
from catprep.context import CatContext
from catprep.errors import CatPrepError, OrphanRenderError
from catprep.logging import ERROR_PREFIX, get_logger, report_errors
from catprep.renderers import (
    ArticleRenderer,
    BaseRenderer,
    RenderSite,
    SubjectRenderer,
    TagIndexRenderer,
    TeacherListRenderer,
    TeacherRenderer,
)

logger = get_logger(__name__)

TEACHERS_PAGE_TITLE = "Teachers"
TAGS_PAGE_TITLE = "Tags"


def _render_each(
    renderer: BaseRenderer[Any],
    entities: Iterable[Any],
    phase: str,
) -> list[RenderSite]:
    """Render every entity; raise the first failure after trying all."""
    sites: list[RenderSite] = []
    errors: list[CatPrepError] = []

    for entity in entities:
        try:
            sites.append(renderer.render(entity))
        except CatPrepError as e:
            errors.append(e)

    if errors:
        report_errors(logger, errors, phase)
        raise errors[0]
    return sites


def create_renders(
    context: CatContext,
    book: Book,
    settings: CatPrepSettings | None = None,
) -> list[RenderSite]:
    """Render the whole context.

    Also pushes the teachers page (if there are teacher cards) and the tags
    page (if any article has tags) into the book. Their renders are only
    produced when the page is pushed.

    Args:
        context: Resolved cat context
        book: Book to receive the synthetic pages
        settings: Preprocessor settings

    Returns:
        Render sites in application order: roster, teachers, subjects,
        articles, tag index.

    Raises:
        TemplateRenderError: The first template failure of a group.
    """
    settings = settings or CatPrepSettings()
    pending: list[RenderSite] = []

    if context.teacher_cards:
        pending.append(TeacherListRenderer(settings).render(context.teacher_cards))

    pending.extend(_render_each(TeacherRenderer(settings), context.teachers, "teachers"))
    pending.extend(_render_each(SubjectRenderer(settings), context.subjects, "subjects"))
    pending.extend(_render_each(ArticleRenderer(settings), context.articles, "articles"))

    if context.tags:
        pending.append(TagIndexRenderer(settings).render(context.tags))

    if context.teacher_cards:
        book.push_chapter(Chapter(
            name=TEACHERS_PAGE_TITLE,
            content=f"# {TEACHERS_PAGE_TITLE}\n",
            path=settings.teachers_page,
        ))

    if context.tags:
        book.push_chapter(Chapter(
            name=TAGS_PAGE_TITLE,
            content="",
            path=settings.tags_page,
        ))

    logger.debug("renders_created", count=len(pending))
    return pending


def execute_renders(renders: Iterable[RenderSite], book: Book) -> None:
    """Apply render sites to the book's chapters.

    Each chapter receives its sites in list order; every site is used
    exactly once.

    Raises:
        OrphanRenderError: For the first site whose path matched no chapter.
    """
    pending = list(renders)

    for chapter in book.chapters():
        if chapter.path is None:
            continue

        remaining: list[RenderSite] = []
        for render in pending:
            if render.site == chapter.path:
                chapter.content = render.directive.apply(chapter.content)
            else:
                remaining.append(render)
        pending = remaining

    if pending:
        for render in pending:
            logger.error(
                "orphan_render",
                prefix=ERROR_PREFIX,
                site=render.site,
                directive=str(render.directive),
            )
        first = pending[0]
        raise OrphanRenderError(first.site, first.directive)


__all__ = [
    "TEACHERS_PAGE_TITLE",
    "TAGS_PAGE_TITLE",
    "create_renders",
    "execute_renders",
]
