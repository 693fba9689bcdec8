"""
Application state model for the Abbreviation Corrector.

Holds the per-session state of the editor: the loaded dataset, the active
file, the selected tab and the row picked in the table.
"""

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from services.row_store import RowStore

from .row import TAB_NOT_COMPLETED


@dataclass
class ApplicationState:
    """
    Session state container.
    
    Attributes:
        store: RowStore holding the authoritative rows of the active file
        active_file: Name of the loaded storage blob, None when nothing is loaded
        current_tab: Tab whose view is displayed (notCompleted/completed)
        selected_index: Index of the selected row in the current view, -1 for none
        files: Blob names from the last storage listing
        pending_delete: File name awaiting delete confirmation
    """
    
    store: Optional["RowStore"] = None
    active_file: Optional[str] = None
    current_tab: str = TAB_NOT_COMPLETED
    selected_index: int = -1
    files: List[str] = field(default_factory=list)
    pending_delete: Optional[str] = None
    
    def __post_init__(self):
        if self.store is None:
            from services.row_store import RowStore
            self.store = RowStore()
    
    def has_rows(self) -> bool:
        """Whether a non-empty dataset is loaded."""
        return not self.store.is_empty()
    
    def reset_dataset(self):
        """Drop the active file and all rows."""
        self.store.clear()
        self.active_file = None
        self.selected_index = -1
