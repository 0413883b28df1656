"""Tests for validation functions."""

import pytest

from crisp_scheduler.validators import (
    validate_candidate,
    validate_organization,
    validate_time_window,
)


class TestValidateTimeWindow:
    """Tests for validate_time_window function."""

    def test_valid(self):
        assert validate_time_window(540, 1020, 15) == (True, None)

    @pytest.mark.parametrize(
        "start,end,granularity",
        [
            (540, 540, 15),
            (600, 540, 15),
            (-15, 540, 15),
            (540, 1020, 0),
            (540, 1000, 15),
        ],
    )
    def test_invalid(self, start, end, granularity):
        is_valid, error = validate_time_window(start, end, granularity)
        assert not is_valid
        assert error


class TestValidateOrganization:
    """Tests for validate_organization function."""

    def test_valid(self):
        assert validate_organization("Acme", 30, 2, 1) == (True, None)

    def test_empty_name(self):
        is_valid, error = validate_organization("  ", 30, 2, 1)
        assert not is_valid
        assert "empty" in error

    def test_non_positive(self):
        is_valid, error = validate_organization("Acme", 30, 0, 1)
        assert not is_valid
        assert "numRounds" in error

    def test_non_integer(self):
        is_valid, _ = validate_organization("Acme", 30.5, 1, 1)
        assert not is_valid
        is_valid, _ = validate_organization("Acme", True, 1, 1)
        assert not is_valid


class TestValidateCandidate:
    """Tests for validate_candidate function."""

    def test_valid(self):
        assert validate_candidate("S1", ["Acme", "Globex"]) == (True, None)
        assert validate_candidate("S1", []) == (True, None)

    def test_empty_id(self):
        is_valid, _ = validate_candidate("", ["Acme"])
        assert not is_valid

    def test_non_string_entry(self):
        is_valid, _ = validate_candidate("S1", ["Acme", 7])
        assert not is_valid
