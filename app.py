"""
Abbreviation Corrector

Main entry point for the Gradio application.
"""

import logging

import gradio as gr

from config import get_settings
from models import ApplicationState
from services import get_storage
from ui.layout import create_main_layout, get_global_css
from ui.event_handlers import (
    generate_status_html,
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
from utils.performance import configure_logging

logger = logging.getLogger(__name__)


def build_app(storage, list_limit: int = 1000) -> gr.Blocks:
    """
    Build the Gradio application around a storage backend.

    Args:
        storage: BlobStorage used for every file operation
        list_limit: Maximum number of files shown in the file list
    """
    with gr.Blocks(
        title="Abbreviation Corrector",
        theme=gr.themes.Soft(),
        css=get_global_css()
    ) as app:

        # Application State
        app_state = gr.State(ApplicationState())

        components = create_main_layout()

        # ========== Output groups ==========

        dataset_outputs = [
            app_state,
            components['status'],
            components['row_table'],
            components['header_summary'],
            components['progress_display'],
            components['sentence_display'],
            components['abbreviation_display'],
            components['long_form_editor'],
            components['domain_editor'],
            components['toggle_btn'],
        ]

        def render(state, status_msg):
            table, header_html, progress_html = render_dataset(state)
            sentence, abbreviation, long_form, domain, toggle_label = selected_row_values(state)
            return (
                state,
                generate_status_html(status_msg),
                table,
                header_html,
                progress_html,
                sentence,
                abbreviation,
                long_form,
                gr.update(value=domain),
                gr.update(value=toggle_label)
            )

        def file_choices(state):
            return gr.update(choices=state.files, value=state.active_file if state.active_file in state.files else None)

        file_outputs = [app_state, components['status'], components['file_list']]

        # ========== File handlers ==========

        def on_start(state):
            state, msg = refresh_file_list(state, storage, list_limit)
            return state, generate_status_html(msg), file_choices(state)

        app.load(fn=on_start, inputs=[app_state], outputs=file_outputs)

        def on_refresh(state):
            return on_start(state)

        components['refresh_btn'].click(fn=on_refresh, inputs=[app_state], outputs=file_outputs)

        def on_upload(file_path, state):
            state, msg = handle_upload(file_path, state, storage, list_limit)
            return state, generate_status_html(msg), file_choices(state)

        components['csv_upload'].upload(
            fn=on_upload,
            inputs=[components['csv_upload'], app_state],
            outputs=file_outputs
        )

        def on_load(name, state):
            state, msg = handle_load_file(name, state, storage)
            return render(state, msg)

        components['load_btn'].click(
            fn=on_load,
            inputs=[components['file_list'], app_state],
            outputs=dataset_outputs
        )

        def on_delete_request(name, state):
            state, prompt, visible = request_delete(name, state)
            return state, prompt, gr.update(visible=visible)

        components['delete_btn'].click(
            fn=on_delete_request,
            inputs=[components['file_list'], app_state],
            outputs=[app_state, components['delete_prompt'], components['delete_confirm_group']]
        )

        def on_confirm_delete(state):
            state, msg = handle_confirm_delete(state, storage, list_limit)
            return render(state, msg) + (file_choices(state), gr.update(visible=False))

        components['confirm_delete_btn'].click(
            fn=on_confirm_delete,
            inputs=[app_state],
            outputs=dataset_outputs + [components['file_list'], components['delete_confirm_group']]
        )

        def on_cancel_delete(state):
            return handle_cancel_delete(state), gr.update(visible=False)

        components['cancel_delete_btn'].click(
            fn=on_cancel_delete,
            inputs=[app_state],
            outputs=[app_state, components['delete_confirm_group']]
        )

        # ========== Dataset handlers ==========

        def on_tab_change(tab, state):
            state = handle_tab_change(tab, state)
            return render(state, f"Showing {tab}")

        components['tab_selector'].change(
            fn=on_tab_change,
            inputs=[components['tab_selector'], app_state],
            outputs=dataset_outputs
        )

        def on_row_select(state, evt: gr.SelectData):
            row_index = evt.index[0] if isinstance(evt.index, (list, tuple)) else evt.index
            state = handle_row_select(int(row_index), state)
            return render(state, f"Row {state.selected_index + 1} selected" if state.selected_index >= 0 else "No row selected")

        components['row_table'].select(
            fn=on_row_select,
            inputs=[app_state],
            outputs=dataset_outputs
        )

        def on_field_input(field):
            def handler(value, state):
                state = handle_update_field(field, value, state)
                table, _, _ = render_dataset(state)
                return state, table
            return handler

        components['long_form_editor'].input(
            fn=on_field_input("long_form"),
            inputs=[components['long_form_editor'], app_state],
            outputs=[app_state, components['row_table']]
        )

        components['domain_editor'].input(
            fn=on_field_input("domain"),
            inputs=[components['domain_editor'], app_state],
            outputs=[app_state, components['row_table']]
        )

        def on_toggle(state):
            state, msg = handle_toggle(state)
            return render(state, msg)

        components['toggle_btn'].click(fn=on_toggle, inputs=[app_state], outputs=dataset_outputs)

        def on_remove_request(state):
            if state.selected_index < 0:
                gr.Warning("Select a row first", duration=2.0)
                return gr.update(visible=False)
            return gr.update(visible=True)

        components['remove_btn'].click(
            fn=on_remove_request,
            inputs=[app_state],
            outputs=[components['remove_confirm_group']]
        )

        def on_confirm_remove(state):
            state, msg = handle_remove_row(state)
            return render(state, msg) + (gr.update(visible=False),)

        components['confirm_remove_btn'].click(
            fn=on_confirm_remove,
            inputs=[app_state],
            outputs=dataset_outputs + [components['remove_confirm_group']]
        )

        components['cancel_remove_btn'].click(
            fn=lambda: gr.update(visible=False),
            inputs=[],
            outputs=[components['remove_confirm_group']]
        )

        # ========== Export handlers ==========

        def on_save(state):
            state, msg = handle_save(state, storage, list_limit)
            return state, generate_status_html(msg), file_choices(state)

        components['save_btn'].click(fn=on_save, inputs=[app_state], outputs=file_outputs)

        def on_download(state):
            file_path, msg = handle_download(state)
            return gr.update(value=file_path, visible=file_path is not None), generate_status_html(msg)

        components['download_btn'].click(
            fn=on_download,
            inputs=[app_state],
            outputs=[components['download_file'], components['status']]
        )

    return app


def main():
    """Main application entry point."""
    settings = get_settings()
    configure_logging(settings.log_level)

    storage = get_storage(settings)
    app = build_app(storage, settings.list_limit)

    logger.info(f"Starting on {settings.server_host}:{settings.server_port} with {settings.storage_type} storage")
    app.launch(
        server_name=settings.server_host,
        server_port=settings.server_port,
        show_error=True
    )


if __name__ == "__main__":
    main()
