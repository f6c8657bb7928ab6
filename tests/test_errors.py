"""Tests for catprep.errors and the error reporting helper."""

from __future__ import annotations

from catprep.errors import (
    CatPrepError,
    CommandFailedError,
    ContextInvariantError,
    ErrorCategory,
    InvalidHeaderFormatError,
    NoTeacherFolderError,
    NotARepoError,
    OrphanRenderError,
    TemplateRenderError,
)
from catprep.logging import ERROR_PREFIX, report_errors
from catprep.renderers import Append


class RecordingLogger:
    def __init__(self):
        self.records: list[tuple[str, dict]] = []

    def error(self, event: str, **kwargs) -> None:
        self.records.append((event, kwargs))


class TestCategories:
    def test_categories(self):
        assert NoTeacherFolderError().category == ErrorCategory.CONFIG
        assert InvalidHeaderFormatError(ValueError("x")).category == ErrorCategory.PARSE
        assert NotARepoError("x").category == ErrorCategory.VCS
        assert TemplateRenderError("x").category == ErrorCategory.RENDER
        assert ContextInvariantError("x").category == ErrorCategory.INTERNAL

    def test_category_override(self):
        error = CatPrepError("boom", category=ErrorCategory.CONFIG)
        assert error.category == ErrorCategory.CONFIG


class TestToDict:
    def test_basic(self):
        error = CommandFailedError("git log", 1, "bad")
        assert error.to_dict() == {
            "error_type": "CommandFailedError",
            "message": "failed to run command: git log exited with code 1 and output 'bad'",
            "category": "VCS",
        }

    def test_with_cause(self):
        cause = ValueError("missing field")
        error = InvalidHeaderFormatError(cause, "a.md")
        assert error.to_dict()["cause"] == "missing field"
        assert error.__cause__ is cause

    def test_repr(self):
        assert repr(NotARepoError("x")).startswith("NotARepoError(")


class TestMessages:
    def test_orphan_render_names_directive_kind(self):
        error = OrphanRenderError("foo.md", Append("rendered text"))
        assert str(error) == "orphan render: Append at foo.md"

    def test_template_error(self):
        assert str(TemplateRenderError("boom")) == "template engine encountered an error: boom"


class TestReportErrors:
    def test_logs_each_error_with_prefix(self):
        logger = RecordingLogger()
        report_errors(logger, [NotARepoError("a"), TemplateRenderError("b")], "articles")
        assert len(logger.records) == 2
        event, fields = logger.records[0]
        assert event == "phase_error"
        assert fields["prefix"] == ERROR_PREFIX
        assert fields["phase"] == "articles"
        assert fields["error"].startswith("not running in a git repository")
