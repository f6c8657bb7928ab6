"""
Shared pytest fixtures for catprep tests.

This module provides:
- A book root with a teachers folder in tmp_path
- Settings pointing at that root
- A FakeHistory and a small calculus book that agree with each other
"""

from __future__ import annotations

from pathlib import Path

import pytest

from catprep.book import Book
from catprep.config import CatPrepSettings
from tests._support.fakes import (
    ALICE,
    BOB,
    FakeHistory,
    article_doc,
    make_book,
    subject_doc,
)


@pytest.fixture
def book_root(tmp_path: Path) -> Path:
    """Book root with alice and bob in ``teachers/``."""
    teachers = tmp_path / "teachers"
    teachers.mkdir()
    (teachers / "alice.toml").write_text(ALICE, encoding="utf-8")
    (teachers / "bob.toml").write_text(BOB, encoding="utf-8")
    (tmp_path / "src").mkdir()
    return tmp_path


@pytest.fixture
def settings(book_root: Path) -> CatPrepSettings:
    return CatPrepSettings(book_root=book_root)


@pytest.fixture
def history() -> FakeHistory:
    """Alice added the subject and limits, bob added derivatives."""
    return FakeHistory(
        created={
            "alice": ["calculus/subject.md", "calculus/limits.md"],
            "bob": ["calculus/derivatives.md"],
        },
        modified={
            "calculus/limits.md": ("2024-03-01 12:00:00 +0100", "bob"),
            "calculus/derivatives.md": ("2024-03-02 12:00:00 +0100", "Someone Else"),
        },
    )


@pytest.fixture
def calculus_book() -> Book:
    return make_book(
        ("intro.md", "# Intro"),
        ("calculus/subject.md", subject_doc("Calculus", "alice@example.com")),
        ("calculus/limits.md", article_doc("Limits", ["intro", "math"])),
        ("calculus/derivatives.md", article_doc("Derivatives", ["math"])),
    )
