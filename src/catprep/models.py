"""
Data models for the cat knowledge graph.

Every model comes as a card/profile pair. The card is what a TOML file or
document header declares (validated with pydantic). The profile is the
frozen graph node the resolver builds around it.

Card keys can be written in English or with the Czech keys of existing
books (``jmeno``, ``nazev``, ``tagy``, ``datum``, ``zodpovedna_osoba``).

Guardrails:
    ❌ DON'T: Mutate a profile after the resolver returned it
    ✅ DO: Use ``dataclasses.replace`` to derive a new one

Tags:
    model, pydantic, dataclass, catprep
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


class _Card(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class TeacherCard(_Card):
    """A teacher, as declared in ``teachers/<username>.toml``.

    The triple (name, email, username) identifies the teacher. Name and
    email should match the teacher's git ``user.name`` and ``user.email``.

    Attributes:
        name: Real name of the teacher.
        email: Email address.
        username: Handle without spaces, used for anchors.
        bio: Markdown description.
    """

    name: str = Field(validation_alias=AliasChoices("name", "jmeno"))
    email: str
    username: str
    bio: str


class SubjectCard(_Card):
    """Front matter of a subject document.

    Attributes:
        title: Subject title used in links and lists.
        owner: Name, email or username of the responsible teacher.
        bio: Short description.
        resolved_path: Path of the subject document, set by the resolver.
    """

    title: str = Field(validation_alias=AliasChoices("title", "nazev"))
    owner: str = Field(validation_alias=AliasChoices("owner", "zodpovedna_osoba"))
    bio: str
    resolved_path: str | None = None


class ArticleCard(_Card):
    """Front matter of an article document.

    Attributes:
        title: Article title.
        tags: Ordered tag names.
        date: Free-form date, if the author gave one.
        resolved_path: Path of the article document, set by the resolver.
    """

    title: str = Field(validation_alias=AliasChoices("title", "nazev"))
    tags: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("tags", "tagy")
    )
    date: str | None = Field(default=None, validation_alias=AliasChoices("date", "datum"))
    resolved_path: str | None = None


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Article:
    """An article with its git metadata.

    Attributes:
        card: The article's front matter.
        last_modified: Timestamp of the latest commit touching the file.
        modified_by: Author name of that commit.
        author: Name of the teacher who added the file, or the unknown
            placeholder.
        path: Document path relative to the book source.
        modified_resolved: Teacher matching ``modified_by``, if any.
        resolved_author: Teacher matching ``author``, if any.
        subject_card: Card of the owning subject.
    """

    card: ArticleCard
    last_modified: str
    modified_by: str
    author: str
    path: str
    modified_resolved: TeacherCard | None = None
    resolved_author: TeacherCard | None = None
    subject_card: SubjectCard | None = None


@dataclass(frozen=True)
class Subject:
    """A subject and the articles under its directory.

    Attributes:
        card: The subject's front matter.
        path: Path of the subject document.
        path_root: Parent directory of ``path``; documents below it are
            the subject's articles.
        articles: Articles owned by this subject.
        resolved_author: Teacher matching ``card.owner``, if any.
    """

    card: SubjectCard
    path: str
    path_root: str
    articles: tuple[Article, ...] = ()
    resolved_author: TeacherCard | None = None


@dataclass(frozen=True)
class Teacher:
    """A teacher with everything attributed to them.

    Attributes:
        card: The teacher card.
        subjects: Subjects attributed to this teacher.
        articles: Articles this teacher created.
        files_created: Tracked paths the teacher added in git.
    """

    card: TeacherCard
    subjects: tuple[Subject, ...] = ()
    articles: tuple[Article, ...] = ()
    files_created: tuple[str, ...] = ()


__all__ = [
    "TeacherCard",
    "SubjectCard",
    "ArticleCard",
    "Article",
    "Subject",
    "Teacher",
]
