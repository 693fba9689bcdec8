"""
RowStore: the authoritative row sequence of the loaded dataset.

Views per tab are recomputed from the authoritative list on every read.
Mutations address rows by their index in a view and are resolved back to
the authoritative list through the row_id of the viewed row.
"""

import logging
from typing import Any, List, Optional

from models import (
    Row,
    Progress,
    EDITABLE_FIELDS,
    parse_completed,
    tab_expects_completed,
)
from utils.validation import validate_index_bounds
from .csv_codec import CsvCodec

logger = logging.getLogger(__name__)


class RowStore:
    """
    Owns the rows of the active dataset and every mutation on them.
    
    Attributes:
        codec: CsvCodec used by load()
    """
    
    def __init__(self, codec: Optional[CsvCodec] = None):
        self.codec = codec or CsvCodec()
        self._rows: List[Row] = []
    
    def __len__(self) -> int:
        return len(self._rows)
    
    @property
    def rows(self) -> List[Row]:
        """Authoritative rows in file order (a new list, same Row objects)."""
        return list(self._rows)
    
    def is_empty(self) -> bool:
        return not self._rows
    
    def load(self, text: str) -> int:
        """
        Replace the dataset with the rows decoded from CSV text.
        
        Args:
            text: CSV text with a header row
        
        Returns:
            Number of rows loaded
        """
        return self.load_rows(self.codec.decode(text))
    
    def load_rows(self, rows: List[Row]) -> int:
        """Replace the dataset with the given rows."""
        self._rows = list(rows)
        logger.debug(f"Loaded {len(self._rows)} rows")
        return len(self._rows)
    
    def clear(self):
        """Discard all rows."""
        self._rows = []
    
    def view_for_tab(self, tab: str) -> List[Row]:
        """
        Rows whose completion status matches the tab, in file order.
        
        The returned rows are the stored objects themselves, not copies.
        
        Raises:
            ValueError: If tab is unknown
        """
        expected = tab_expects_completed(tab)
        return [row for row in self._rows if row.completed == expected]
    
    def _resolve(self, view_index: int, tab: str) -> Optional[int]:
        """
        Map a view index to the authoritative index, or None when stale.
        """
        view = self.view_for_tab(tab)
        is_valid, error_msg = validate_index_bounds(view_index, len(view))
        if not is_valid:
            logger.debug(f"Ignoring stale view index on tab '{tab}': {error_msg}")
            return None
        
        row_id = view[view_index].row_id
        for position, row in enumerate(self._rows):
            if row.row_id == row_id:
                return position
        return None
    
    def update_field(self, view_index: int, tab: str, field: str, value: Any) -> bool:
        """
        Replace one field of the row shown at view_index under tab.
        
        Args:
            view_index: Index of the row in view_for_tab(tab)
            tab: Tab the index refers to
            field: One of EDITABLE_FIELDS
            value: New value; completed accepts bools or truthy tokens
        
        Returns:
            True if a row was updated, False if the index was stale
        
        Raises:
            ValueError: If field is not editable or tab is unknown
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(
                f"Field '{field}' cannot be edited. Editable fields: {EDITABLE_FIELDS}"
            )
        
        position = self._resolve(view_index, tab)
        if position is None:
            return False
        
        if field == "completed":
            value = parse_completed(value)
        elif value is None:
            value = ""
        
        setattr(self._rows[position], field, value)
        logger.debug(f"Updated {field} of row {position}")
        return True
    
    def toggle_completion(self, view_index: int, tab: str) -> bool:
        """
        Flip the completion flag of the row at view_index under tab.
        
        The row moves to the other tab's view on the next read.
        
        Returns:
            True if a row was toggled, False if the index was stale
        """
        position = self._resolve(view_index, tab)
        if position is None:
            return False
        
        row = self._rows[position]
        row.completed = not row.completed
        logger.debug(f"Row {position} marked {'completed' if row.completed else 'not completed'}")
        return True
    
    def remove_row(self, view_index: int, tab: str) -> Optional[Row]:
        """
        Delete the row at view_index under tab from the dataset.
        
        Returns:
            The removed Row, or None if the index was stale
        """
        position = self._resolve(view_index, tab)
        if position is None:
            return None
        
        removed = self._rows.pop(position)
        logger.debug(f"Removed row {position}")
        return removed
    
    def get_progress(self) -> Progress:
        """Completed count, total count and rounded percentage."""
        completed_count = sum(1 for row in self._rows if row.completed)
        return Progress.from_counts(completed_count, len(self._rows))
