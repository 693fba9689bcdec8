"""UI components for the Abbreviation Corrector."""

from .layout import (
    create_main_layout,
    get_global_css
)
from .event_handlers import (
    generate_status_html,
    generate_header_html,
    update_progress_display,
    rows_to_table,
    render_dataset,
    selected_row_values,
    refresh_file_list,
    handle_upload,
    handle_load_file,
    request_delete,
    handle_confirm_delete,
    handle_cancel_delete,
    handle_tab_change,
    handle_row_select,
    handle_update_field,
    handle_toggle,
    handle_remove_row,
    handle_save,
    handle_download
)

__all__ = [
    "create_main_layout",
    "get_global_css",
    "generate_status_html",
    "generate_header_html",
    "update_progress_display",
    "rows_to_table",
    "render_dataset",
    "selected_row_values",
    "refresh_file_list",
    "handle_upload",
    "handle_load_file",
    "request_delete",
    "handle_confirm_delete",
    "handle_cancel_delete",
    "handle_tab_change",
    "handle_row_select",
    "handle_update_field",
    "handle_toggle",
    "handle_remove_row",
    "handle_save",
    "handle_download"
]
