"""
mdBook document tree.

A thin model of the ``Book`` JSON that mdBook hands to preprocessors.
Chapters are the only documents; separators and part titles are kept as
raw JSON values and written back unchanged.

Usage::

    book = Book.from_dict(json.loads(raw)["sections"])
    for chapter in book.chapters():
        chapter.content = chapter.content.upper()
    json.dumps(book.to_dict())
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# mdBook 0.4 serializes the item list as "sections", 0.5 as "items"
_ITEM_KEYS = ("sections", "items")


@dataclass
class Chapter:
    """A single book chapter.

    Attributes:
        name: Chapter title shown in the summary.
        content: Markdown content, mutated in place by the pipeline.
        path: Path relative to the book source directory (None for drafts).
        number: Section number, e.g. ``[1, 2]``.
        sub_items: Nested items (chapters or raw separators).
        source_path: Original source path as mdBook reported it.
        parent_names: Names of the enclosing chapters.
    """

    name: str
    content: str = ""
    path: str | None = None
    number: list[int] | None = None
    sub_items: list[Any] = field(default_factory=list)
    source_path: str | None = None
    parent_names: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Chapter:
        return cls(
            name=data.get("name", ""),
            content=data.get("content", ""),
            path=data.get("path"),
            number=data.get("number"),
            sub_items=[_item_from_json(item) for item in data.get("sub_items", [])],
            source_path=data.get("source_path"),
            parent_names=list(data.get("parent_names", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "content": self.content,
            "number": self.number,
            "sub_items": [_item_to_json(item) for item in self.sub_items],
            "path": self.path,
            "source_path": self.source_path,
            "parent_names": self.parent_names,
        }


def _item_from_json(item: Any) -> Any:
    if isinstance(item, dict) and "Chapter" in item:
        return Chapter.from_dict(item["Chapter"])
    return item


def _item_to_json(item: Any) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": item.to_dict()}
    return item


@dataclass
class Book:
    """Ordered tree of book items.

    Attributes:
        items: Top-level items (Chapter objects or raw JSON values).
        items_key: JSON key the item list was read from.
        extra: Other top-level keys, preserved verbatim.
    """

    items: list[Any] = field(default_factory=list)
    items_key: str = "sections"
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Book:
        """Load a book from mdBook's JSON representation."""
        items_key = next((key for key in _ITEM_KEYS if key in data), "sections")
        extra = {key: value for key, value in data.items() if key != items_key}
        return cls(
            items=[_item_from_json(item) for item in data.get(items_key, [])],
            items_key=items_key,
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        data = {self.items_key: [_item_to_json(item) for item in self.items]}
        data.update(self.extra)
        return data

    @classmethod
    def from_directory(cls, src: Path) -> Book:
        """Build a flat book from every Markdown file under ``src``.

        Chapter paths are relative to ``src`` with forward slashes, in
        sorted order. Used when there is no mdBook process around.
        """
        src = Path(src)
        chapters = []
        for md_file in sorted(src.rglob("*.md")):
            rel = md_file.relative_to(src).as_posix()
            chapters.append(Chapter(
                name=md_file.stem,
                content=md_file.read_text(encoding="utf-8"),
                path=rel,
                source_path=rel,
            ))
        return cls(items=chapters)

    def chapters(self) -> Iterator[Chapter]:
        """Yield every chapter depth-first, parents before sub-items."""
        stack = list(reversed(self.items))
        while stack:
            item = stack.pop()
            if isinstance(item, Chapter):
                yield item
                stack.extend(reversed(item.sub_items))

    def push_chapter(self, chapter: Chapter) -> None:
        """Append a top-level chapter."""
        self.items.append(chapter)


__all__ = ["Book", "Chapter"]
