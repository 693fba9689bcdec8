"""
Row data model for the Abbreviation Corrector.

Represents a single abbreviation annotation record loaded from a CSV dataset.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any


# Column order of the CSV files read and written by the application
COLUMNS = ["sentence", "abbreviation", "long_form", "domain", "completed"]

# Fields the user is allowed to change after a file is loaded
EDITABLE_FIELDS = ["long_form", "domain", "completed"]

DOMAIN_OPTIONS = [
    "",
    "Science",
    "Technology",
    "Business",
    "Government",
    "Medical",
    "Education",
    "Economics",
    "Other",
]

TAB_NOT_COMPLETED = "notCompleted"
TAB_COMPLETED = "completed"
VALID_TABS = [TAB_NOT_COMPLETED, TAB_COMPLETED]

TRUTHY_TOKENS = ("true", "1", "yes", "y")


def parse_completed(value: Any) -> bool:
    """
    Normalize a completion flag read from a CSV cell.
    
    Args:
        value: Raw cell value (string, bool, number or None)
    
    Returns:
        True for true/1/yes/y (case-insensitive), False for anything else
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_TOKENS


def tab_expects_completed(tab: str) -> bool:
    """
    Map a tab name to the completion value its rows carry.
    
    Raises:
        ValueError: If tab is not one of VALID_TABS
    """
    if tab not in VALID_TABS:
        raise ValueError(f"Invalid tab: {tab}. Must be one of {VALID_TABS}")
    return tab == TAB_COMPLETED


@dataclass
class Row:
    """
    Represents a single abbreviation annotation.
    
    Attributes:
        sentence: Sentence containing the abbreviation (read-only in the UI)
        abbreviation: The abbreviation itself (read-only in the UI)
        long_form: Expanded form of the abbreviation
        domain: Category label, one of DOMAIN_OPTIONS or a custom value
        completed: Whether the annotation has been reviewed
        row_id: Synthetic identifier assigned at construction, never exported
    """
    
    sentence: str = ""
    abbreviation: str = ""
    long_form: str = ""
    domain: str = ""
    completed: bool = False
    row_id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False, repr=False)
    
    def to_record(self) -> dict:
        """Return the exported columns, with the flag rendered as true/false."""
        return {
            "sentence": self.sentence,
            "abbreviation": self.abbreviation,
            "long_form": self.long_form,
            "domain": self.domain,
            "completed": "true" if self.completed else "false",
        }
