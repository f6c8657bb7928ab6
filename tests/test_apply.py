"""Tests for catprep.apply: creating renders and placing them in the book."""

from __future__ import annotations

import pytest

from catprep.apply import create_renders, execute_renders
from catprep.book import Book, Chapter
from catprep.config import CatPrepSettings
from catprep.context import CatContext
from catprep.errors import OrphanRenderError, TemplateRenderError
from catprep.renderers import Append, Prepend, RenderSite, ReplacePage, Wrap
from tests._support.fakes import FakeHistory


class TestExecuteRenders:
    """Applying render sites to chapters."""

    def test_wrap(self):
        book = Book(items=[Chapter("A", "BODY", path="a.md")])
        execute_renders([RenderSite("a.md", Wrap("PRE", "POST"))], book)
        assert book.items[0].content == "PRE\nBODY\nPOST"

    def test_sites_apply_in_order(self):
        book = Book(items=[Chapter("A", "BODY", path="a.md")])
        execute_renders([
            RenderSite("a.md", Append("one")),
            RenderSite("a.md", Prepend("zero")),
            RenderSite("a.md", Append("two")),
        ], book)
        assert book.items[0].content == "zero\nBODY\none\ntwo"

    def test_replace_page(self):
        book = Book(items=[Chapter("Tags", "", path="tags.md")])
        execute_renders([RenderSite("tags.md", ReplacePage("# Tags"))], book)
        assert book.items[0].content == "# Tags"

    def test_nested_chapter(self):
        child = Chapter("B", "BODY", path="a/b.md")
        book = Book(items=[Chapter("A", "", path="a.md", sub_items=[child])])
        execute_renders([RenderSite("a/b.md", Append("END"))], book)
        assert child.content == "BODY\nEND"

    def test_other_chapters_untouched(self):
        book = Book(items=[
            Chapter("A", "a", path="a.md"),
            Chapter("B", "b", path="b.md"),
        ])
        execute_renders([RenderSite("a.md", Append("x"))], book)
        assert book.items[1].content == "b"

    def test_orphan_render(self):
        book = Book(items=[Chapter("A", "BODY", path="a.md")])
        with pytest.raises(OrphanRenderError) as exc_info:
            execute_renders([
                RenderSite("a.md", Append("x")),
                RenderSite("foo.md", Wrap("secret", "secret")),
                RenderSite("bar.md", Append("y")),
            ], book)
        assert exc_info.value.site == "foo.md"
        assert str(exc_info.value) == "orphan render: Wrap at foo.md"

    def test_draft_chapter_never_matches(self):
        book = Book(items=[Chapter("Draft", "", path=None)])
        with pytest.raises(OrphanRenderError):
            execute_renders([RenderSite("draft.md", Append("x"))], book)

    def test_no_renders(self):
        book = Book(items=[Chapter("A", "BODY", path="a.md")])
        execute_renders([], book)
        assert book.items[0].content == "BODY"


class TestCreateRenders:
    """Rendering the whole context and adding synthetic pages."""

    @pytest.fixture
    def context(self, calculus_book: Book, history: FakeHistory, settings: CatPrepSettings):
        return CatContext.from_book(calculus_book, history, settings)

    def test_render_order(self, context: CatContext, calculus_book: Book, settings: CatPrepSettings):
        renders = create_renders(context, calculus_book, settings)
        assert [r.site for r in renders] == [
            "teachers.md",
            "teachers.md",
            "teachers.md",
            "calculus/subject.md",
            "calculus/derivatives.md",
            "calculus/limits.md",
            "tags.md",
        ]

    def test_pushes_synthetic_pages(self, context, calculus_book, settings):
        create_renders(context, calculus_book, settings)
        pushed = calculus_book.items[-2:]
        assert [(c.name, c.path, c.content) for c in pushed] == [
            ("Teachers", "teachers.md", "# Teachers\n"),
            ("Tags", "tags.md", ""),
        ]

    def test_full_application(self, context, calculus_book, settings):
        execute_renders(create_renders(context, calculus_book, settings), calculus_book)
        pages = {c.path: c.content for c in calculus_book.chapters()}
        assert pages["teachers.md"].startswith("# Teachers\n\n")
        assert pages["teachers.md"].index("[Alice Novak](#alice)") < pages["teachers.md"].index('<h2 id="alice">')
        assert pages["tags.md"].startswith("# Tags")
        assert "Article body" in pages["calculus/limits.md"]
        assert pages["intro.md"] == "# Intro"

    def test_empty_corpus_has_no_orphans(self, tmp_path):
        (tmp_path / "teachers").mkdir()
        settings = CatPrepSettings(book_root=tmp_path)
        book = Book()
        context = CatContext.from_book(book, FakeHistory(), settings)
        renders = create_renders(context, book, settings)
        assert renders == []
        assert book.items == []
        execute_renders(renders, book)

    def test_no_tags_no_tag_page(self, settings):
        book = Book(items=[
            Chapter("Calc", 'title = "Calc"\nowner = "alice"\nbio = ""\n+++\n', path="calc/subject.md"),
            Chapter("A", 'title = "A"\n+++\nbody', path="calc/a.md"),
        ])
        context = CatContext.from_book(book, FakeHistory(), settings)
        renders = create_renders(context, book, settings)
        assert "tags.md" not in [r.site for r in renders]
        assert "tags.md" not in [c.path for c in book.chapters()]
        execute_renders(renders, book)

    def test_template_failure(self, context, calculus_book, tmp_path):
        settings = CatPrepSettings(book_root=tmp_path, template_dir=tmp_path / "empty")
        with pytest.raises(TemplateRenderError):
            create_renders(context, calculus_book, settings)
