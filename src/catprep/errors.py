"""
Structured error types for the cat preprocessor.

Every failure the pipeline can report is a :class:`CatPrepError`. Each
subclass fixes an :class:`ErrorCategory` so the CLI and logs can tell
configuration problems from malformed documents, failed git calls, and
broken renders.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                        CatPrepError                          │
        │                    (category, to_dict)                       │
        ├──────────────────────────────────────────────────────────────┤
        │  CONFIG                 PARSE                 VCS            │
        │  NoTeacherFolderError   InvalidTeacherCard    CommandFailed  │
        │  TeachersNotAFolder     MissingHeaderError    NotARepoError  │
        │                         InvalidHeaderFormat                  │
        │                                                              │
        │  RENDER                 INTERNAL                             │
        │  TemplateRenderError    ContextInvariantError                │
        │  OrphanRenderError                                           │
        └──────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Keep the templating library's exception object around
    ✅ DO: Store only its message in TemplateRenderError

Tags:
    error-handling, exception-hierarchy, catprep
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from catprep.renderers.base import RenderDirective


class ErrorCategory(str, Enum):
    """Error categories for classification in logs and CLI output."""

    CONFIG = "CONFIG"  # teachers folder missing or wrong type
    PARSE = "PARSE"  # card or header could not be parsed
    VCS = "VCS"  # git unavailable or a query failed
    RENDER = "RENDER"  # template failure or orphan render
    INTERNAL = "INTERNAL"  # invariant violated inside the resolver


class CatPrepError(Exception):
    """Base exception for all cat preprocessor errors.

    Subclasses set ``default_category``. The message is what gets printed
    after the ``[cat-prep]`` prefix.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class NoTeacherFolderError(CatPrepError):
    """The teachers folder does not exist."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, folder: str = "teachers"):
        super().__init__("teachers folder doesn't exist")
        self.folder = folder


class TeachersNotAFolderError(CatPrepError):
    """The teachers path exists but is a plain file."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, folder: str = "teachers"):
        super().__init__(f"file '{folder}' is not a folder")
        self.folder = folder


# =============================================================================
# PARSE ERRORS
# =============================================================================


class InvalidTeacherCardError(CatPrepError):
    """A teacher card file could not be parsed."""

    default_category = ErrorCategory.PARSE

    def __init__(self, name: str, error: Exception):
        super().__init__(f"invalid teacher file: {name}: {error}", cause=error)
        self.name = name
        self.error = error


class MissingHeaderError(CatPrepError):
    """The document has no front matter delimiter line."""

    default_category = ErrorCategory.PARSE

    def __init__(self, path: str | None = None):
        super().__init__("the header is either missing or invalid")
        self.path = path


class InvalidHeaderFormatError(CatPrepError):
    """The front matter is not valid TOML or misses required keys."""

    default_category = ErrorCategory.PARSE

    def __init__(self, error: Exception, path: str | None = None):
        super().__init__(f"the header has invalid format: {error}", cause=error)
        self.error = error
        self.path = path


# =============================================================================
# VCS ERRORS
# =============================================================================


class CommandFailedError(CatPrepError):
    """An external command exited with a nonzero status."""

    default_category = ErrorCategory.VCS

    def __init__(self, name: str, status: int, stderr: str):
        super().__init__(
            f"failed to run command: {name} exited with code {status} and output '{stderr}'"
        )
        self.name = name
        self.status = status
        self.stderr = stderr


class NotARepoError(CatPrepError):
    """The book is not inside a (non-bare) git work tree."""

    default_category = ErrorCategory.VCS

    def __init__(self, error: str):
        super().__init__(
            f"not running in a git repository or the repository is bare: {error}"
        )
        self.error = error


# =============================================================================
# RENDER ERRORS
# =============================================================================


class TemplateRenderError(CatPrepError):
    """The template engine failed.

    Terminal: only the display string is kept, never the engine's
    exception object.
    """

    default_category = ErrorCategory.RENDER

    def __init__(self, error: str):
        super().__init__(f"template engine encountered an error: {error}")
        self.error = error


class OrphanRenderError(CatPrepError):
    """A render targeted a path that no chapter in the book has."""

    default_category = ErrorCategory.RENDER

    def __init__(self, site: str, directive: RenderDirective):
        super().__init__(f"orphan render: {directive} at {site}")
        self.site = site
        self.directive = directive


class ContextInvariantError(CatPrepError):
    """The resolver reached a state its own construction rules out."""

    default_category = ErrorCategory.INTERNAL


__all__ = [
    "ErrorCategory",
    "CatPrepError",
    "NoTeacherFolderError",
    "TeachersNotAFolderError",
    "InvalidTeacherCardError",
    "MissingHeaderError",
    "InvalidHeaderFormatError",
    "CommandFailedError",
    "NotARepoError",
    "TemplateRenderError",
    "OrphanRenderError",
    "ContextInvariantError",
]
