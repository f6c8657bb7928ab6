"""
The mdBook preprocessor.

Coordinates one run: resolve the cat context (stripping headers), create
the renders, apply them. A run either patches the whole book or fails
without output.

Architecture:
    ```
    CatPreprocessor.run(context, book)
          │
          ├──► CatContext.from_book()     headers stripped
          │
          ├──► create_renders()           teachers/tags pages pushed
          │
          └──► execute_renders()          every render placed once
    ```
"""

from __future__ import annotations

from typing import Any

from catprep.apply import create_renders, execute_renders
from catprep.book import Book
from catprep.config import CatPrepSettings
from catprep.context import CatContext
from catprep.errors import CatPrepError
from catprep.history import GitHistory, VersionHistory
from catprep.logging import ERROR_PREFIX, get_logger

logger = get_logger(__name__)

# mdBook release line the book JSON format was checked against
SUPPORTED_MDBOOK_VERSION = "0.4"


class CatPreprocessor:
    """Preprocessor building teacher, subject, article and tag pages.

    Args:
        settings: Preprocessor settings
        history: Version-control adapter (git in the source dir if None)
    """

    name = "cat-preprocessor"

    def __init__(
        self,
        settings: CatPrepSettings | None = None,
        history: VersionHistory | None = None,
    ):
        self.settings = settings or CatPrepSettings()
        self.history = history or GitHistory(
            self.settings.source_path, self.settings.git_executable
        )

    @classmethod
    def from_preprocessor_context(cls, context: dict[str, Any]) -> CatPreprocessor:
        """Create a preprocessor configured from mdBook's context JSON."""
        return cls(CatPrepSettings.from_preprocessor_context(context))

    def supports_renderer(self, renderer: str) -> bool:
        """Every renderer that handles Markdown with inline HTML works."""
        return renderer != "not-supported"

    def check_version(self, context: dict[str, Any]) -> None:
        """Warn when mdBook is from another release line."""
        version = context.get("mdbook_version", "")
        if not version.startswith(SUPPORTED_MDBOOK_VERSION):
            logger.warning(
                "mdbook_version_mismatch",
                preprocessor=self.name,
                supported=SUPPORTED_MDBOOK_VERSION,
                running=version,
            )

    def run(self, book: Book) -> Book:
        """Patch the book in place and return it.

        Raises:
            CatPrepError: The first error of the failing stage.
        """
        try:
            context = CatContext.from_book(book, self.history, self.settings)
        except CatPrepError as e:
            logger.error("context_failed", prefix=ERROR_PREFIX, error=str(e))
            raise

        try:
            renders = create_renders(context, book, self.settings)
            execute_renders(renders, book)
        except CatPrepError as e:
            logger.error("render_failed", prefix=ERROR_PREFIX, error=str(e))
            raise

        logger.info("book_processed", **context.stats())
        return book


__all__ = ["SUPPORTED_MDBOOK_VERSION", "CatPreprocessor"]
