"""Tests for spot title and floor rules."""

import pytest

from spotmap.exceptions import ValidationError
from spotmap.services.validation import (
    INVALID_FLOOR,
    INVALID_TITLE,
    check_title_and_floor,
    is_valid_floor,
    is_valid_title,
)


class TestTitle:
    """Titles: 3-20 letters, digits, whitespace or apostrophes."""

    @pytest.mark.parametrize(
        "title",
        ["Gym", "Quiet Corner", "Bob's Cafe", "Room 101", "A" * 20],
    )
    def test_accepts_valid_titles(self, title):
        assert is_valid_title(title)

    @pytest.mark.parametrize(
        "title",
        ["", "Hi", "A" * 21, "Cafe!", "north-wing", "Lab_2"],
    )
    def test_rejects_invalid_titles(self, title):
        assert not is_valid_title(title)


class TestFloor:
    """Floors: absent, or 1-3 uppercase letters and digits."""

    @pytest.mark.parametrize("floor", [None, "1", "B2", "10A", "G"])
    def test_accepts_valid_floors(self, floor):
        assert is_valid_floor(floor)

    @pytest.mark.parametrize("floor", ["", "b2", "1234", "2nd", "-1", "B2\n", "1\n"])
    def test_rejects_invalid_floors(self, floor):
        assert not is_valid_floor(floor)


class TestCheckTitleAndFloor:
    def test_valid_input_passes(self):
        check_title_and_floor("Quiet Corner", "B2")

    def test_bad_floor_reports_floor(self):
        with pytest.raises(ValidationError) as exc_info:
            check_title_and_floor("Quiet Corner", "b2")
        assert exc_info.value.message == INVALID_FLOOR
        assert exc_info.value.status_code == 400

    def test_title_is_reported_before_floor(self):
        """When both are malformed, the title error wins."""
        with pytest.raises(ValidationError) as exc_info:
            check_title_and_floor("Hi", "b2")
        assert exc_info.value.message == INVALID_TITLE
