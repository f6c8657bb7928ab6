"""
cat-prep: an mdBook preprocessor for study materials.

Builds a graph of teachers, subjects and articles from a book's TOML
front matter and its git history, then patches the book with profile
pages, info tables, and a tag index.

Quick start::

    from catprep import Book, CatPreprocessor

    book = Book.from_dict(book_json)
    CatPreprocessor().run(book)
"""

__version__ = "0.1.0"

from catprep.book import Book, Chapter
from catprep.config import CatPrepSettings
from catprep.context import CatContext
from catprep.errors import CatPrepError, ErrorCategory
from catprep.models import (
    Article,
    ArticleCard,
    Subject,
    SubjectCard,
    Teacher,
    TeacherCard,
)
from catprep.preprocessor import CatPreprocessor

__all__ = [
    "__version__",
    "Book",
    "Chapter",
    "CatPrepSettings",
    "CatContext",
    "CatPrepError",
    "ErrorCategory",
    "Article",
    "ArticleCard",
    "Subject",
    "SubjectCard",
    "Teacher",
    "TeacherCard",
    "CatPreprocessor",
]
