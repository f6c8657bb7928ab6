"""
Front matter splitting and card parsing.

Documents start with a TOML header terminated by a ``+++`` line::

    title = "Derivatives"
    tags = ["calculus", "intro"]
    +++
    # Derivatives
    ...

Teacher cards are standalone TOML files in the ``teachers`` folder.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from catprep.errors import (
    InvalidTeacherCardError,
    MissingHeaderError,
    NoTeacherFolderError,
    TeachersNotAFolderError,
)
from catprep.logging import get_logger
from catprep.models import TeacherCard

logger = get_logger(__name__)

DEFAULT_DELIMITER = "+++"

CardT = TypeVar("CardT", bound=BaseModel)


def extract_header(text: str, delimiter: str = DEFAULT_DELIMITER) -> tuple[str, str]:
    """Split a document into its header and body.

    Args:
        text: Raw document text
        delimiter: Line that terminates the header

    Returns:
        Tuple of (header, body). Neither contains the delimiter line.

    Only ``\\n`` separates lines (a ``\\r`` before it belongs to the line
    ending), so the body comes back byte for byte.

    Raises:
        MissingHeaderError: If no line equals the delimiter.
    """
    lines = text.split("\n")
    split_at = next(
        (i for i, line in enumerate(lines) if line.removesuffix("\r") == delimiter),
        None,
    )
    if split_at is None:
        raise MissingHeaderError()

    header = "\n".join(lines[:split_at]).removesuffix("\r")
    body = "\n".join(lines[split_at + 1:])
    return header, body


def parse_card(card_type: type[CardT], text: str) -> CardT:
    """Parse TOML text into a card.

    Raises:
        tomllib.TOMLDecodeError: If the text is not TOML.
        pydantic.ValidationError: If keys are missing or mistyped.
    """
    return card_type.model_validate(tomllib.loads(text))


def read_teacher_cards(folder: Path, suffix: str = ".toml") -> list[TeacherCard]:
    """Read every teacher card directly inside ``folder``.

    Subdirectories and files with another suffix are ignored. All files are
    parsed before the first failure is reported.

    Args:
        folder: The teachers folder
        suffix: Card file extension

    Returns:
        Teacher cards in directory listing order

    Raises:
        NoTeacherFolderError: If ``folder`` does not exist.
        TeachersNotAFolderError: If ``folder`` is a file.
        InvalidTeacherCardError: For the first card that fails to parse.
    """
    folder = Path(folder)
    if not folder.exists():
        raise NoTeacherFolderError(str(folder))
    if not folder.is_dir():
        raise TeachersNotAFolderError(folder.name)

    cards: list[TeacherCard] = []
    failures: list[InvalidTeacherCardError] = []

    for card_file in sorted(folder.iterdir()):
        if not card_file.is_file() or not card_file.name.endswith(suffix):
            continue

        try:
            cards.append(parse_card(TeacherCard, card_file.read_text(encoding="utf-8")))
        except (tomllib.TOMLDecodeError, ValidationError) as e:
            logger.warning("teacher_card_invalid", file=card_file.name, error=str(e))
            failures.append(InvalidTeacherCardError(card_file.name, e))

    if failures:
        raise failures[0]

    logger.debug("teacher_cards_loaded", count=len(cards))
    return cards


__all__ = ["DEFAULT_DELIMITER", "extract_header", "parse_card", "read_teacher_cards"]
