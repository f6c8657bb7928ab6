"""
Version-control queries used to attribute documents to teachers.

The resolver only talks to the :class:`VersionHistory` protocol. Its three
questions are "which files did this person add", "when was this file last
changed" and "who changed it last". :class:`GitHistory` answers them with
blocking ``git`` subprocess calls run from the book source directory, so
every path it returns or accepts is relative to that directory, exactly
like chapter paths.

Architecture::

    ContextBuilder ──► VersionHistory (protocol)
                            │
                            ├── GitHistory      (subprocess git)
                            └── FakeHistory     (tests)
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

from catprep.errors import CommandFailedError, NotARepoError
from catprep.logging import get_logger
from catprep.models import TeacherCard

logger = get_logger(__name__)

# Prefix of commit header lines in log output; git quotes control characters in paths
COMMIT_MARKER = "\x01"


class VersionHistory(Protocol):
    """What the resolver needs to know from version control."""

    def ensure_repository(self) -> None:
        """Raise NotARepoError unless running inside a work tree."""
        ...


    def files_created_by(self, card: TeacherCard) -> tuple[str, ...]:
        """Tracked paths added in commits authored by the teacher."""
        ...

    def last_modified(self, path: str) -> str:
        """Timestamp of the latest commit touching ``path``."""
        ...

    def last_modified_by(self, path: str) -> str:
        """Author name of the latest commit touching ``path``."""
        ...


class GitHistory:
    """:class:`VersionHistory` backed by the ``git`` command line.

    Args:
        workdir: Directory git runs in; paths are relative to it
        git: Name or path of the git executable
    """

    def __init__(self, workdir: Path, git: str = "git"):
        self.workdir = Path(workdir)
        self.git = git
        self._tracked: frozenset[str] | None = None

    def _run(self, name: str, *args: str) -> str:
        """Run a git sub-command and return its stdout.

        Raises:
            CommandFailedError: On a nonzero exit status.
        """
        cmd = [self.git, *args]
        logger.debug("git_command", command=" ".join(cmd))
        result = subprocess.run(
            cmd, capture_output=True, cwd=str(self.workdir),
        )
        stdout = result.stdout.decode("utf-8", errors="replace")
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise CommandFailedError(f"git {name}", result.returncode, stderr)
        return stdout

    def ensure_repository(self) -> None:
        try:
            output = self._run("rev-parse", "rev-parse", "--is-inside-work-tree")
        except CommandFailedError as e:
            raise NotARepoError(e.stderr) from e
        except OSError as e:
            raise NotARepoError(str(e)) from e
        if output.strip() != "true":
            raise NotARepoError(output.strip())

    def tracked_files(self) -> frozenset[str]:
        """Files currently tracked below the working directory."""
        if self._tracked is None:
            output = self._run("ls-files", "ls-files")
            self._tracked = frozenset(line for line in output.split("\n") if line)
        return self._tracked

    def files_created_by(self, card: TeacherCard) -> tuple[str, ...]:
        """Tracked paths added in commits whose author is the teacher.

        ``--author`` only narrows the log (it is a substring match); each
        commit's author name or email must then equal one of the card's
        identities exactly.
        """
        identities = tuple(dict.fromkeys(
            i for i in (card.name, card.email, card.username) if i
        ))
        authors: list[str] = []
        for identity in identities:
            authors.extend(["--author", identity])

        output = self._run(
            "log",
            "log", "--diff-filter=A", "--name-only", "--relative",
            f"--format={COMMIT_MARKER}%an%x00%ae", "--fixed-strings", *authors,
        )
        tracked = self.tracked_files()

        created: dict[str, None] = {}
        authored = False
        for line in output.split("\n"):
            if line.startswith(COMMIT_MARKER):
                name, _, email = line[len(COMMIT_MARKER):].partition("\x00")
                authored = name in identities or email in identities
                continue
            path = line.strip()
            if authored and path and path in tracked:
                created.setdefault(path, None)
        return tuple(created)

    def last_modified(self, path: str) -> str:
        return self._run("log", "log", "-1", "--format=%ci", "--", path).strip()

    def last_modified_by(self, path: str) -> str:
        return self._run("log", "log", "-1", "--format=%an", "--", path).strip()


__all__ = ["COMMIT_MARKER", "VersionHistory", "GitHistory"]
