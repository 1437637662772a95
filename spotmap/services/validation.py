"""Representation checks for spot titles and floors."""

import re

from spotmap.exceptions import ValidationError

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 20
FLOOR_MAX_LENGTH = 3

TITLE_PATTERN = re.compile(r"[A-Za-z0-9\s']+")
FLOOR_PATTERN = re.compile(r"[A-Z0-9]+")

INVALID_TITLE = "The title must be a unique name between 3 and 20 characters!"
INVALID_FLOOR = "The floor must be alphanumerics and cannot be greater than 3 characters!"


def is_valid_title(title: str) -> bool:
    """Letters, digits, whitespace and apostrophes only, 3-20 characters."""
    return (
        TITLE_PATTERN.fullmatch(title) is not None
        and TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH
    )


def is_valid_floor(floor: str | None) -> bool:
    """No floor at all, or 1-3 uppercase letters/digits."""
    if floor is None:
        return True
    return FLOOR_PATTERN.fullmatch(floor) is not None and len(floor) <= FLOOR_MAX_LENGTH


def check_title_and_floor(title: str, floor: str | None) -> None:
    """Raise ``ValidationError`` if the title or floor is malformed.

    The title is checked first, so a request with both wrong reports the title.
    """
    if not is_valid_title(title):
        raise ValidationError(INVALID_TITLE)
    if not is_valid_floor(floor):
        raise ValidationError(INVALID_FLOOR)
