"""
Cat context: the teacher/subject/article graph of a book.

The builder walks the book once per phase and never revisits a finished
phase. Within a phase every item is attempted; if any failed, all failures
are logged and the first one is raised.

Architecture:
    ```
    teachers/*.toml ──► A. teachers (+ files each one added in git)
                             │
    book chapters ─────► B. subjects   (*/subject.md headers)
                             │  path_root = parent directory
                             ▼
                        C. articles    (documents below a path_root)
                             │
                             ▼
                        D. git metadata, creation author,
                           articles pushed into their subject
                             │
                             ▼
                        E. subjects and articles linked to teachers
                             │
                             ▼
                        F. owner/modifier/author identities resolved,
                           articles stamped with their subject card
                             │
                             ▼
                        G. tag index ──► CatContext (read-only)
    ```

Headers are stripped from the book as a side effect of phases B and C.

Guardrails:
    - Subject directories must not nest. An article under two roots
      belongs to the first subject in title order.
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import ValidationError

from catprep.book import Book, Chapter
from catprep.cards import extract_header, parse_card, read_teacher_cards
from catprep.config import CatPrepSettings
from catprep.errors import (
    CatPrepError,
    CommandFailedError,
    ContextInvariantError,
    InvalidHeaderFormatError,
    MissingHeaderError,
)
from catprep.history import GitHistory, VersionHistory
from catprep.logging import get_logger, report_errors
from catprep.models import (
    Article,
    ArticleCard,
    Subject,
    SubjectCard,
    Teacher,
    TeacherCard,
)
from catprep.tags import index_tags

logger = get_logger(__name__)

CardT = TypeVar("CardT", SubjectCard, ArticleCard)

# Order in which card fields are compared against an identity string
IDENTITY_FIELDS = ("username", "email", "name")


def parent_dir(path: str) -> str:
    """Parent directory of a chapter path (``"."`` at the top level)."""
    return PurePosixPath(path).parent.as_posix()


def is_under(path: str, root: str) -> bool:
    """Whether ``root`` is a component-wise prefix of ``path``."""
    root_parts = PurePosixPath(root).parts
    return PurePosixPath(path).parts[:len(root_parts)] == root_parts


def resolve_identity(identity: str, cards: Iterable[TeacherCard]) -> TeacherCard | None:
    """Find the teacher an identity string refers to.

    Usernames are compared first, then emails, then names. Within a
    field the first card in order wins.
    """
    cards = list(cards)
    for attr in IDENTITY_FIELDS:
        for card in cards:
            if getattr(card, attr) == identity:
                return card
    return None


@dataclass(frozen=True)
class CatContext:
    """Everything known about a book's teachers, subjects and articles.

    Cards and profiles are stored side by side for direct lookup. The
    context is read-only; nothing keeps the copies in sync.
    """

    teacher_cards: tuple[TeacherCard, ...] = ()
    teachers: tuple[Teacher, ...] = ()
    subject_cards: tuple[SubjectCard, ...] = ()
    subjects: tuple[Subject, ...] = ()
    article_cards: tuple[ArticleCard, ...] = ()
    articles: tuple[Article, ...] = ()
    tags: Mapping[str, tuple[ArticleCard, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_book(
        cls,
        book: Book,
        history: VersionHistory | None = None,
        settings: CatPrepSettings | None = None,
    ) -> CatContext:
        """Resolve the context of a book.

        Strips the front matter of every subject and article chapter.

        Args:
            book: The book, mutated in place
            history: Version-control adapter (git in the source dir if None)
            settings: Preprocessor settings

        Raises:
            CatPrepError: The first error of the first failing phase.
        """
        settings = settings or CatPrepSettings()
        if history is None:
            history = GitHistory(settings.source_path, settings.git_executable)
        return ContextBuilder(history, settings).build(book)

    def stats(self) -> dict[str, Any]:
        """Entity counts for reporting."""
        return {
            "teachers": len(self.teachers),
            "subjects": len(self.subjects),
            "articles": len(self.articles),
            "tags": len(self.tags),
            "unattributed_articles": sum(
                1 for a in self.articles if a.resolved_author is None
            ),
        }


class ContextBuilder:
    """Build a :class:`CatContext` from a book and its git history.

    Args:
        history: Version-control adapter
        settings: Preprocessor settings
    """

    def __init__(self, history: VersionHistory, settings: CatPrepSettings | None = None):
        self.history = history
        self.settings = settings or CatPrepSettings()

    def build(self, book: Book) -> CatContext:
        self.history.ensure_repository()

        teachers = self._load_teachers()

        subject_cards = self._extract_subjects(book)
        subjects = [
            Subject(
                card=card,
                path=card.resolved_path,
                path_root=parent_dir(card.resolved_path),
            )
            for card in subject_cards
        ]

        article_cards = self._extract_articles(book, subjects)
        articles, subjects = self._enrich_articles(article_cards, subjects, teachers)
        teachers = self._link_teachers(teachers, subjects, articles)
        subjects, articles = self._resolve_identities(subjects, articles, teachers)
        tags = index_tags(article_cards)

        logger.info(
            "context_built",
            teachers=len(teachers),
            subjects=len(subjects),
            articles=len(articles),
            tags=len(tags),
        )

        return CatContext(
            teacher_cards=tuple(t.card for t in teachers),
            teachers=tuple(teachers),
            subject_cards=tuple(subject_cards),
            subjects=tuple(subjects),
            article_cards=tuple(article_cards),
            articles=tuple(articles),
            tags=tags,
        )

    # ── Phase A ──────────────────────────────────────────────────

    def _load_teachers(self) -> list[Teacher]:
        cards = read_teacher_cards(
            self.settings.teachers_path,
            suffix=self.settings.teacher_card_suffix,
        )
        cards.sort(key=lambda c: c.name)

        teachers: list[Teacher] = []
        errors: list[CatPrepError] = []
        for card in cards:
            try:
                files = self.history.files_created_by(card)
            except CommandFailedError as e:
                logger.warning("teacher_history_failed", teacher=card.username)
                errors.append(e)
                continue
            teachers.append(Teacher(card=card, files_created=files))

        self._raise_first(errors, "teachers")
        return teachers

    # ── Phases B and C ───────────────────────────────────────────

    def _is_subject_document(self, path: str) -> bool:
        return PurePosixPath(path).name == self.settings.subject_marker

    def _extract_subjects(self, book: Book) -> list[SubjectCard]:
        chapters = [
            c for c in book.chapters()
            if c.path is not None and self._is_subject_document(c.path)
        ]
        return self._extract_cards(chapters, SubjectCard, "subjects")

    def _extract_articles(self, book: Book, subjects: list[Subject]) -> list[ArticleCard]:
        roots = [s.path_root for s in subjects]
        chapters = [
            c for c in book.chapters()
            if c.path is not None
            and not self._is_subject_document(c.path)
            and any(is_under(c.path, root) for root in roots)
        ]
        return self._extract_cards(chapters, ArticleCard, "articles")

    def _extract_cards(
        self,
        chapters: list[Chapter],
        card_type: type[CardT],
        phase: str,
    ) -> list[CardT]:
        """Strip and parse the header of each chapter."""
        cards: list[CardT] = []
        errors: list[CatPrepError] = []

        for chapter in chapters:
            try:
                header, body = extract_header(chapter.content, self.settings.header_delimiter)
            except MissingHeaderError:
                logger.warning("header_missing", path=chapter.path)
                errors.append(MissingHeaderError(chapter.path))
                continue

            chapter.content = body

            try:
                card = parse_card(card_type, header)
            except (tomllib.TOMLDecodeError, ValidationError) as e:
                logger.warning("header_invalid", path=chapter.path)
                errors.append(InvalidHeaderFormatError(e, chapter.path))
                continue

            cards.append(card.model_copy(update={"resolved_path": chapter.path}))

        self._raise_first(errors, phase)
        cards.sort(key=lambda c: c.title)
        return cards

    # ── Phase D ──────────────────────────────────────────────────

    def _enrich_articles(
        self,
        cards: list[ArticleCard],
        subjects: list[Subject],
        teachers: list[Teacher],
    ) -> tuple[list[Article], list[Subject]]:
        owned: list[list[Article]] = [[] for _ in subjects]
        articles: list[Article] = []

        for card in cards:
            path = card.resolved_path
            last_modified = self.history.last_modified(path)
            modified_by = self.history.last_modified_by(path)
            author = next(
                (t.card.name for t in teachers if path in t.files_created),
                self.settings.unknown_author,
            )

            article = Article(
                card=card,
                last_modified=last_modified,
                modified_by=modified_by,
                author=author,
                path=path,
            )
            articles.append(article)
            owned[self._owning_subject(path, subjects)].append(article)

        subjects = [replace(s, articles=tuple(a)) for s, a in zip(subjects, owned)]
        return articles, subjects

    @staticmethod
    def _owning_subject(path: str, subjects: list[Subject]) -> int:
        """Index of the first subject whose root contains ``path``."""
        for index, subject in enumerate(subjects):
            if is_under(path, subject.path_root):
                return index
        raise ContextInvariantError(f"no subject owns article {path}")

    # ── Phase E ──────────────────────────────────────────────────

    def _link_teachers(
        self,
        teachers: list[Teacher],
        subjects: list[Subject],
        articles: list[Article],
    ) -> list[Teacher]:
        subject_links: list[list[Subject]] = [[] for _ in teachers]
        article_links: list[list[Article]] = [[] for _ in teachers]

        for subject in subjects:
            creator = self._subject_creator(subject, teachers)
            if creator is not None:
                subject_links[creator].append(subject)

        # every creator gets the article, unlike subjects
        for article in articles:
            for index, teacher in enumerate(teachers):
                if article.path in teacher.files_created:
                    article_links[index].append(article)

        return [
            replace(t, subjects=tuple(s), articles=tuple(a))
            for t, s, a in zip(teachers, subject_links, article_links)
        ]

    @staticmethod
    def _subject_creator(subject: Subject, teachers: list[Teacher]) -> int | None:
        """Teacher who added the subject document, else its first article."""
        for index, teacher in enumerate(teachers):
            if subject.path in teacher.files_created:
                return index
        for article in subject.articles:
            for index, teacher in enumerate(teachers):
                if article.path in teacher.files_created:
                    return index
        return None

    # ── Phase F ──────────────────────────────────────────────────

    def _resolve_identities(
        self,
        subjects: list[Subject],
        articles: list[Article],
        teachers: list[Teacher],
    ) -> tuple[list[Subject], list[Article]]:
        cards = [t.card for t in teachers]

        subjects = [
            replace(s, resolved_author=resolve_identity(s.card.owner, cards))
            for s in subjects
        ]

        resolved: list[Article] = []
        for article in articles:
            subject = subjects[self._owning_subject(article.path, subjects)]
            resolved.append(replace(
                article,
                modified_resolved=resolve_identity(article.modified_by, cards),
                resolved_author=resolve_identity(article.author, cards),
                subject_card=subject.card,
            ))

        return subjects, resolved

    @staticmethod
    def _raise_first(errors: list[CatPrepError], phase: str) -> None:
        if errors:
            report_errors(logger, errors, phase)
            raise errors[0]


__all__ = [
    "IDENTITY_FIELDS",
    "CatContext",
    "ContextBuilder",
    "is_under",
    "parent_dir",
    "resolve_identity",
]
