"""
Validation utilities for user input.

Provides validation functions for file names, view indices, tabs and columns.
Each returns (is_valid, error_message) so handlers can surface the message.
"""

from typing import Tuple, List, Optional

from models import VALID_TABS


def validate_csv_filename(name: Optional[str]) -> Tuple[bool, str]:
    """
    Validate an uploaded or selected file name.
    
    Args:
        name: Blob name (no directories)
    
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not name.strip():
        return False, "No file selected"
    
    if "/" in name or "\\" in name:
        return False, f"File name must not contain path separators: {name}"
    
    if not name.lower().endswith(".csv"):
        return False, f"Only .csv files are supported: {name}"
    
    return True, ""


def validate_index_bounds(index: int, total: int) -> Tuple[bool, str]:
    """
    Validate that a view index is within bounds.
    
    Args:
        index: Index to validate
        total: Number of rows in the view
    
    Returns:
        Tuple of (is_valid, error_message)
    """
    if index < 0:
        return False, "Index must not be negative"
    
    if index >= total:
        return False, f"Index {index} out of range (rows: {total})"
    
    return True, ""


def validate_tab(tab: str) -> Tuple[bool, str]:
    """Validate a tab name."""
    if tab not in VALID_TABS:
        return False, f"Invalid tab: {tab}. Must be one of {VALID_TABS}"
    return True, ""


def missing_columns(columns: List[str]) -> List[str]:
    """
    List the expected columns absent from a decoded header, honouring the
    abbr/long fallbacks. Missing columns are reported, not rejected.
    """
    present = set(columns)
    missing = []
    for column, fallback in (
        ("sentence", None),
        ("abbreviation", "abbr"),
        ("long_form", "long"),
        ("domain", None),
        ("completed", None),
    ):
        if column not in present and (fallback is None or fallback not in present):
            missing.append(column)
    return missing
