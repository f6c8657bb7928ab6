"""Tests for catprep.book: the mdBook JSON model."""

from __future__ import annotations

from pathlib import Path

from catprep.book import Book, Chapter


def _chapter_json(name: str, path: str | None, sub_items: list | None = None) -> dict:
    return {
        "Chapter": {
            "name": name,
            "content": f"# {name}",
            "number": [1],
            "sub_items": sub_items or [],
            "path": path,
            "source_path": path,
            "parent_names": [],
        }
    }


class TestBookJson:
    """Reading and writing mdBook's book JSON."""

    def test_reads_sections(self):
        book = Book.from_dict({
            "sections": [_chapter_json("Intro", "intro.md"), "Separator"],
            "__non_exhaustive": None,
        })
        assert isinstance(book.items[0], Chapter)
        assert book.items[0].path == "intro.md"
        assert book.items[1] == "Separator"
        assert book.items_key == "sections"

    def test_reads_items_key(self):
        book = Book.from_dict({"items": [_chapter_json("Intro", "intro.md")]})
        assert book.items_key == "items"
        assert "items" in book.to_dict()
        assert "sections" not in book.to_dict()

    def test_round_trip_preserves_unknown_keys(self):
        data = {
            "sections": [
                _chapter_json("Intro", "intro.md", [_chapter_json("Sub", "intro/sub.md")]),
                {"PartTitle": "Part"},
            ],
            "__non_exhaustive": None,
        }
        assert Book.from_dict(data).to_dict() == data

    def test_nested_chapters_parsed(self):
        book = Book.from_dict({
            "sections": [_chapter_json("Intro", "intro.md", [_chapter_json("Sub", "intro/sub.md")])]
        })
        assert isinstance(book.items[0].sub_items[0], Chapter)


class TestChapterWalk:
    """Depth-first walk and pushing chapters."""

    def test_parents_before_children(self):
        child = Chapter("Child", path="a/child.md")
        grandchild = Chapter("Grandchild", path="a/b/gc.md")
        child.sub_items.append(grandchild)
        parent = Chapter("Parent", path="a/index.md", sub_items=[child, "Separator"])
        sibling = Chapter("Sibling", path="b.md")
        book = Book(items=[parent, "Separator", sibling])
        assert [c.name for c in book.chapters()] == ["Parent", "Child", "Grandchild", "Sibling"]

    def test_walk_yields_live_chapters(self):
        book = Book(items=[Chapter("A", "old", path="a.md")])
        for chapter in book.chapters():
            chapter.content = "new"
        assert book.items[0].content == "new"

    def test_push_chapter(self):
        book = Book(items=[Chapter("A", path="a.md")])
        book.push_chapter(Chapter("Tags", path="tags.md"))
        assert [c.path for c in book.chapters()] == ["a.md", "tags.md"]


class TestFromDirectory:
    def test_collects_markdown_sorted(self, tmp_path: Path):
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "subject.md").write_text("x", encoding="utf-8")
        (tmp_path / "a.md").write_text("y", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("z", encoding="utf-8")
        book = Book.from_directory(tmp_path)
        assert [c.path for c in book.chapters()] == ["a.md", "b/subject.md"]
        assert book.items[0].name == "a"
        assert book.items[0].content == "y"
