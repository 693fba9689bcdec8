"""
Event handlers for UI components.

Handles user interactions and state updates. Handlers return plain values;
app.py maps them onto Gradio components. Storage is passed in explicitly.
"""

from typing import Tuple, List, Optional
import os
import html
import logging

import gradio as gr
import pandas as pd

from models import (
    ApplicationState,
    Progress,
    Row,
    TAB_COMPLETED,
    TAB_NOT_COMPLETED,
)
from services import BlobStorage, ExportManager, StorageError
from utils.validation import (
    validate_csv_filename,
    validate_index_bounds,
    validate_tab,
)

logger = logging.getLogger(__name__)

TABLE_HEADERS = ["Sentence", "Abbrev.", "Long Form", "Domain", "Status"]

TAB_LABELS = {
    TAB_NOT_COMPLETED: "Not Completed",
    TAB_COMPLETED: "Completed",
}

EMPTY_EDITOR = ("", "", "", "", "✔ Complete")

NO_ROWS_MESSAGE = "No rows loaded"


def generate_status_html(status_text: str) -> str:
    """Wrap a status message for the status bar."""
    return f'<div class="load-status">{html.escape(status_text)}</div>'


def generate_header_html(progress: Progress) -> str:
    """
    Summary line under the title.

    Args:
        progress: Current dataset progress

    Returns:
        "N of M completed (P%)" HTML, or an empty string with no rows loaded
    """
    if progress.total_count == 0:
        return ""
    return (
        f'<p class="header-summary"><span class="count">{progress.completed_count}</span> '
        f'of {progress.total_count} completed ({progress.percent}%)</p>'
    )


def update_progress_display(progress: Progress, active_file: Optional[str]) -> str:
    """
    Generate the active file panel with its progress bar.

    Args:
        progress: Current dataset progress
        active_file: Loaded file name, or None

    Returns:
        HTML string for the progress panel
    """
    if not active_file:
        return '<div class="active-file">No file loaded</div>'

    return f'''
    <div class="active-file">
        <p class="active-file-name">Active File: {html.escape(active_file)}</p>
        <div class="progress-track">
            <div class="progress-fill" style="width: {progress.percent}%;"></div>
        </div>
        <p class="progress-counts"><b>{progress.completed_count}</b> completed,
        <b>{progress.remaining_count}</b> remaining</p>
    </div>
    '''


def rows_to_table(rows: List[Row]) -> pd.DataFrame:
    """
    Convert rows of a view into the table shown in the UI.

    Args:
        rows: Rows of the current view

    Returns:
        DataFrame with TABLE_HEADERS columns
    """
    records = [
        [
            row.sentence,
            row.abbreviation,
            row.long_form,
            row.domain or "—",
            "✅ Completed" if row.completed else "⭕ Pending",
        ]
        for row in rows
    ]
    return pd.DataFrame(records, columns=TABLE_HEADERS)


def render_dataset(state: ApplicationState) -> Tuple[pd.DataFrame, str, str]:
    """
    Render the current view and progress of the session.

    Returns:
        Tuple of (table, header_html, progress_html)
    """
    progress = state.store.get_progress()
    table = rows_to_table(state.store.view_for_tab(state.current_tab))
    return table, generate_header_html(progress), update_progress_display(progress, state.active_file)


def selected_row_values(state: ApplicationState) -> Tuple[str, str, str, str, str]:
    """
    Values for the row editor from the selected row.

    Returns:
        Tuple of (sentence, abbreviation, long_form, domain, toggle_button_label);
        empty values when nothing valid is selected
    """
    view = state.store.view_for_tab(state.current_tab)
    is_valid, _ = validate_index_bounds(state.selected_index, len(view))
    if not is_valid:
        return EMPTY_EDITOR

    row = view[state.selected_index]
    toggle_label = "↺ Mark Incomplete" if row.completed else "✔ Complete"
    return row.sentence, row.abbreviation, row.long_form, row.domain, toggle_label


def refresh_file_list(state: ApplicationState, storage: BlobStorage, limit: int = 1000) -> Tuple[ApplicationState, str]:
    """
    Reload the file names from storage.

    Returns:
        Tuple of (state, status message); the previous list is kept on failure
    """
    try:
        state.files = [blob.name for blob in storage.list("", limit=limit)]
    except StorageError as e:
        gr.Warning(f"Failed to list files: {e}", duration=3.0)
        return state, f"❌ Failed to list files: {e}"

    if not state.files:
        return state, "📁 No files uploaded yet."
    return state, f"📁 {len(state.files)} file(s) in storage"


def handle_upload(file_path: Optional[str], state: ApplicationState, storage: BlobStorage, limit: int = 1000) -> Tuple[ApplicationState, str]:
    """
    Upload a local CSV file to storage under its own name.

    Args:
        file_path: Path of the file picked in the browser
        state: Current session state
        storage: Storage backend

    Returns:
        Tuple of (state, status message)
    """
    if not file_path:
        return state, "⚠️ Please choose a CSV file"

    name = os.path.basename(file_path)
    is_valid, error_msg = validate_csv_filename(name)
    if not is_valid:
        gr.Warning(error_msg, duration=3.0)
        return state, f"⚠️ {error_msg}"

    try:
        with open(file_path, "rb") as f:
            content = f.read()
        storage.upload(name, content, overwrite=True)
    except (StorageError, OSError) as e:
        gr.Warning(f"Upload failed: {e}", duration=3.0)
        return state, f"❌ Upload failed: {e}"

    state, _ = refresh_file_list(state, storage, limit)
    gr.Info(f"Uploaded {name}", duration=2.0)
    return state, f"✅ Uploaded {name}"


def handle_load_file(name: Optional[str], state: ApplicationState, storage: BlobStorage) -> Tuple[ApplicationState, str]:
    """
    Download a file from storage and make it the active dataset.

    On failure the previously loaded dataset stays untouched.

    Returns:
        Tuple of (state, status message)
    """
    if not name:
        gr.Warning("Select a file first", duration=2.0)
        return state, "⚠️ Select a file first"

    try:
        content = storage.download(name)
    except StorageError as e:
        gr.Warning(f"Failed to download file: {e}", duration=3.0)
        return state, f"❌ Failed to download file: {e}"

    text = state.store.codec.decode_bytes(content)
    count = state.store.load(text)
    state.active_file = name
    state.selected_index = -1

    logger.info(f"Loaded {name} with {count} rows")
    return state, f"✅ Loaded {name}: {count} rows"


def request_delete(name: Optional[str], state: ApplicationState) -> Tuple[ApplicationState, str, bool]:
    """
    First step of file deletion: remember the file and ask for confirmation.

    Returns:
        Tuple of (state, confirmation prompt, confirm_visible)
    """
    if not name:
        gr.Warning("Select a file first", duration=2.0)
        return state, "", False

    state.pending_delete = name
    return state, f"Delete **{name}**?", True


def handle_confirm_delete(state: ApplicationState, storage: BlobStorage, limit: int = 1000) -> Tuple[ApplicationState, str]:
    """
    Delete the file awaiting confirmation.

    Deleting the active file also discards the loaded dataset.

    Returns:
        Tuple of (state, status message)
    """
    name = state.pending_delete
    state.pending_delete = None
    if not name:
        return state, "⚠️ Nothing to delete"

    try:
        storage.delete([name])
    except StorageError as e:
        gr.Warning(f"Delete failed: {e}", duration=3.0)
        return state, f"❌ Delete failed: {e}"

    if state.active_file == name:
        state.reset_dataset()

    state, _ = refresh_file_list(state, storage, limit)
    return state, f"🗑️ Deleted {name}"


def handle_cancel_delete(state: ApplicationState) -> ApplicationState:
    """Drop a pending delete request."""
    state.pending_delete = None
    return state


def handle_tab_change(tab: str, state: ApplicationState) -> ApplicationState:
    """
    Switch the displayed tab. Clears the row selection.
    """
    is_valid, error_msg = validate_tab(tab)
    if not is_valid:
        gr.Warning(error_msg, duration=2.0)
        return state

    state.current_tab = tab
    state.selected_index = -1
    return state


def handle_row_select(view_index: int, state: ApplicationState) -> ApplicationState:
    """
    Select a row of the current view for editing.

    An index outside the view clears the selection.
    """
    view_length = len(state.store.view_for_tab(state.current_tab))
    is_valid, _ = validate_index_bounds(view_index, view_length)
    state.selected_index = view_index if is_valid else -1
    return state


def handle_update_field(field: str, value: str, state: ApplicationState) -> ApplicationState:
    """
    Apply an edit of the selected row's long form or domain.

    A stale selection is ignored.
    """
    if state.selected_index < 0:
        return state

    if not state.store.update_field(state.selected_index, state.current_tab, field, value):
        logger.debug(f"Edit of {field} ignored: selection {state.selected_index} is stale")
        state.selected_index = -1
    return state


def handle_toggle(state: ApplicationState) -> Tuple[ApplicationState, str]:
    """
    Toggle completion of the selected row. The row leaves the current view,
    so the selection is cleared.

    Returns:
        Tuple of (state, status message)
    """
    if state.selected_index < 0:
        gr.Warning("Select a row first", duration=2.0)
        return state, "⚠️ Select a row first"

    toggled = state.store.toggle_completion(state.selected_index, state.current_tab)
    state.selected_index = -1
    if not toggled:
        return state, "⚠️ The selected row is no longer in this tab"

    progress = state.store.get_progress()
    return state, f"✅ {progress.completed_count} of {progress.total_count} completed"


def handle_remove_row(state: ApplicationState) -> Tuple[ApplicationState, str]:
    """
    Remove the selected row after the user confirmed.

    Returns:
        Tuple of (state, status message)
    """
    if state.selected_index < 0:
        gr.Warning("Select a row first", duration=2.0)
        return state, "⚠️ Select a row first"

    removed = state.store.remove_row(state.selected_index, state.current_tab)
    state.selected_index = -1
    if removed is None:
        return state, "⚠️ The selected row is no longer in this tab"

    return state, f"🗑️ Removed row '{removed.abbreviation}'"


def handle_save(state: ApplicationState, storage: BlobStorage, limit: int = 1000) -> Tuple[ApplicationState, str]:
    """
    Save the dataset to storage under the progress-based name.

    Returns:
        Tuple of (state, status message)
    """
    if not state.active_file:
        gr.Warning("No file loaded.", duration=2.0)
        return state, "⚠️ No file loaded."

    if not state.has_rows():
        gr.Warning(NO_ROWS_MESSAGE, duration=2.0)
        return state, f"⚠️ {NO_ROWS_MESSAGE}"

    try:
        new_name = ExportManager(state.store.codec).save_to_storage(storage, state.active_file, state.store)
    except StorageError as e:
        gr.Warning(f"Save failed: {e}", duration=3.0)
        return state, f"❌ Save failed: {e}"

    state, _ = refresh_file_list(state, storage, limit)
    gr.Info(f"Saved as {new_name}", duration=2.0)
    return state, f"✅ Saved as {new_name}"


def handle_download(state: ApplicationState) -> Tuple[Optional[str], str]:
    """
    Write the dataset to a local file for the browser to download.

    Returns:
        Tuple of (file_path or None, status message)
    """
    if not state.has_rows():
        gr.Warning(NO_ROWS_MESSAGE, duration=2.0)
        return None, f"⚠️ {NO_ROWS_MESSAGE}"

    try:
        file_path = ExportManager(state.store.codec).export_to_file(state.active_file, state.store)
    except OSError as e:
        gr.Warning(f"Download failed: {e}", duration=3.0)
        return None, f"❌ Download failed: {e}"

    return file_path, f"✅ Ready to download: {os.path.basename(file_path)}"
