"""
Unit tests for validation utilities.

Tests validation functions for file names, indices, tabs and columns.
"""

import pytest
from utils.validation import (
    validate_csv_filename,
    validate_index_bounds,
    validate_tab,
    missing_columns
)


@pytest.mark.parametrize("name", ["medical.csv", "DATA.CSV", "set{50%}.csv"])
def test_validate_csv_filename_valid(name):
    """Test accepted file names."""
    assert validate_csv_filename(name) == (True, "")


def test_validate_csv_filename_empty():
    """Test that a missing name is rejected."""
    for name in [None, "", "   "]:
        is_valid, error_msg = validate_csv_filename(name)
        assert is_valid == False
        assert error_msg == "No file selected"


def test_validate_csv_filename_wrong_extension():
    """Test that only .csv files are accepted."""
    is_valid, error_msg = validate_csv_filename("notes.txt")
    assert is_valid == False
    assert "Only .csv files are supported" in error_msg


def test_validate_csv_filename_path_separators():
    """Test that names with directories are rejected."""
    for name in ["dir/a.csv", "dir\\a.csv"]:
        is_valid, error_msg = validate_csv_filename(name)
        assert is_valid == False
        assert "path separators" in error_msg


def test_validate_index_bounds_valid():
    """Test validation of valid indices."""
    assert validate_index_bounds(0, 10) == (True, "")
    assert validate_index_bounds(9, 10) == (True, "")


def test_validate_index_bounds_negative():
    """Test validation of negative index."""
    is_valid, error_msg = validate_index_bounds(-1, 10)
    assert is_valid == False
    assert "negative" in error_msg


def test_validate_index_bounds_out_of_range():
    """Test validation of index out of range."""
    is_valid, error_msg = validate_index_bounds(10, 10)
    assert is_valid == False
    assert error_msg == "Index 10 out of range (rows: 10)"

    is_valid, _ = validate_index_bounds(0, 0)
    assert is_valid == False


def test_validate_tab():
    """Test tab names."""
    assert validate_tab("notCompleted") == (True, "")
    assert validate_tab("completed") == (True, "")

    is_valid, error_msg = validate_tab("archived")
    assert is_valid == False
    assert "Invalid tab: archived" in error_msg


def test_missing_columns_complete_header():
    """Test a header with every column."""
    assert missing_columns(["sentence", "abbreviation", "long_form", "domain", "completed"]) == []


def test_missing_columns_fallback_names():
    """Test that abbr and long stand in for their columns."""
    assert missing_columns(["sentence", "abbr", "long", "domain", "completed"]) == []


def test_missing_columns_reports_absent():
    """Test that absent columns are listed in order."""
    assert missing_columns(["sentence", "abbr"]) == ["long_form", "domain", "completed"]
