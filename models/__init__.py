"""Data models for the Abbreviation Corrector."""

from .row import (
    Row,
    COLUMNS,
    EDITABLE_FIELDS,
    DOMAIN_OPTIONS,
    TAB_NOT_COMPLETED,
    TAB_COMPLETED,
    VALID_TABS,
    TRUTHY_TOKENS,
    parse_completed,
    tab_expects_completed,
)
from .progress import Progress
from .application_state import ApplicationState

__all__ = [
    "Row",
    "COLUMNS",
    "EDITABLE_FIELDS",
    "DOMAIN_OPTIONS",
    "TAB_NOT_COMPLETED",
    "TAB_COMPLETED",
    "VALID_TABS",
    "TRUTHY_TOKENS",
    "parse_completed",
    "tab_expects_completed",
    "Progress",
    "ApplicationState",
]
