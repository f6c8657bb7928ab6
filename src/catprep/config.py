"""
Settings for the cat preprocessor.

All fields can be set through ``CATPREP_*`` environment variables (e.g.
``CATPREP_LOG_LEVEL=DEBUG``). When running under mdBook, the book root,
its source directory, and the ``[preprocessor.cat]`` and
``[preprocessor.cat-prep]`` tables of ``book.toml`` are layered on top.

Tags:
    configuration, settings, pydantic, catprep
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# [preprocessor.<name>] tables of book.toml holding settings; later ones win
PREPROCESSOR_NAMES = ("cat", "cat-prep")


class CatPrepSettings(BaseSettings):
    """Cat preprocessor configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CATPREP_",
        extra="ignore",
    )

    # ── Layout ───────────────────────────────────────────────────
    book_root: Path = Field(default=Path("."), description="mdBook root directory")
    source_dir: str = Field(default="src", description="Book sources, relative to book_root")
    teachers_dir: str = Field(default="teachers", description="Teacher cards, relative to book_root")
    teacher_card_suffix: str = Field(default=".toml")
    subject_marker: str = Field(default="subject.md", description="Filename of subject documents")
    header_delimiter: str = Field(default="+++")

    # ── Output ───────────────────────────────────────────────────
    teachers_page: str = Field(default="teachers.md")
    tags_page: str = Field(default="tags.md")
    unknown_author: str = Field(default="Unknown")
    template_dir: Path | None = Field(default=None)
    disqus_shortname: str | None = Field(
        default=None, description="Disqus site embedded under every article"
    )

    # ── Git ──────────────────────────────────────────────────────
    git_executable: str = Field(default="git")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console")

    @property
    def source_path(self) -> Path:
        """Directory that chapter paths are relative to."""
        return self.book_root / self.source_dir

    @property
    def teachers_path(self) -> Path:
        return self.book_root / self.teachers_dir

    @classmethod
    def from_preprocessor_context(cls, context: dict[str, Any]) -> CatPrepSettings:
        """Build settings from the context mdBook passes on stdin.

        Args:
            context: The ``PreprocessorContext`` JSON object

        Returns:
            Settings with the book layout and preprocessor tables applied
        """
        overrides: dict[str, Any] = {}

        if context.get("root"):
            overrides["book_root"] = Path(context["root"])

        config = context.get("config") or {}
        src = (config.get("book") or {}).get("src")
        if src:
            overrides["source_dir"] = src

        preprocessors = config.get("preprocessor") or {}
        for table_name in PREPROCESSOR_NAMES:
            for key, value in (preprocessors.get(table_name) or {}).items():
                name = key.replace("-", "_")
                if name in cls.model_fields:
                    overrides[name] = value

        return cls(**overrides)


__all__ = ["PREPROCESSOR_NAMES", "CatPrepSettings"]
