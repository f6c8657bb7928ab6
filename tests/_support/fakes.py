"""
In-memory stand-ins for version control and books.

FakeHistory implements the VersionHistory protocol from plain dicts, so
resolver tests never touch git.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from catprep.book import Book, Chapter
from catprep.errors import CommandFailedError, NotARepoError
from catprep.models import TeacherCard

ALICE = """\
name = "Alice Novak"
email = "alice@example.com"
username = "alice"
bio = "Teaches calculus."
"""

BOB = """\
name = "Bob Dvorak"
email = "bob@example.com"
username = "bob"
bio = "Teaches git."
"""

DEFAULT_MODIFIED = ("2024-01-01 10:00:00 +0100", "Nobody")


class FakeHistory:
    """In-memory version history.

    Args:
        created: username -> paths the teacher added
        modified: path -> (timestamp, author name)
        is_repo: False to make ensure_repository fail
        failing: usernames whose creation query fails
        failing_paths: paths whose last-modified queries fail
    """

    def __init__(
        self,
        created: dict[str, list[str]] | None = None,
        modified: dict[str, tuple[str, str]] | None = None,
        is_repo: bool = True,
        failing: set[str] | None = None,
        failing_paths: set[str] | None = None,
    ):
        self.created = created or {}
        self.modified = modified or {}
        self.is_repo = is_repo
        self.failing = failing or set()
        self.failing_paths = failing_paths or set()
        self.queried: list[str] = []

    def ensure_repository(self) -> None:
        if not self.is_repo:
            raise NotARepoError("fatal: not a git repository")

    def files_created_by(self, card: TeacherCard) -> tuple[str, ...]:
        self.queried.append(card.username)
        if card.username in self.failing:
            raise CommandFailedError("git log", 128, "fatal: bad revision")
        return tuple(self.created.get(card.username, ()))

    def _check_path(self, path: str) -> None:
        if path in self.failing_paths:
            raise CommandFailedError("git log", 128, f"fatal: bad object for {path}")

    def last_modified(self, path: str) -> str:
        self._check_path(path)
        return self.modified.get(path, DEFAULT_MODIFIED)[0]

    def last_modified_by(self, path: str) -> str:
        self._check_path(path)
        return self.modified.get(path, DEFAULT_MODIFIED)[1]


def make_book(*documents: tuple[str, str], **extra: Any) -> Book:
    """Build a flat book from (path, content) pairs."""
    chapters = [
        Chapter(name=Path(path).stem, content=content, path=path, source_path=path)
        for path, content in documents
    ]
    return Book(items=chapters, extra=dict(extra))


def subject_doc(title: str, owner: str, body: str = "Subject body") -> str:
    return f'title = "{title}"\nowner = "{owner}"\nbio = "About {title}"\n+++\n{body}'


def article_doc(title: str, tags: list[str] | None = None, body: str = "Article body") -> str:
    tag_list = ", ".join(f'"{t}"' for t in tags or [])
    return f'title = "{title}"\ntags = [{tag_list}]\n+++\n{body}'
