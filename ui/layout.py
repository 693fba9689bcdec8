"""
UI layout components for the Abbreviation Corrector.

Defines the single-screen Gradio layout: file management, active file
progress, completion tabs, the row table and the row editor.
"""

import gradio as gr
from typing import Dict, Any

from models import DOMAIN_OPTIONS, TAB_COMPLETED, TAB_NOT_COMPLETED
from .event_handlers import TABLE_HEADERS, TAB_LABELS


GLOBAL_CSS = """
.gradio-container { font-family: "Inter", sans-serif !important; max-width: 1280px !important; }
h1 { font-size: 30px !important; font-weight: 600 !important; }

/* Status bar */
.load-status {
    padding: 10px 15px;
    border-radius: 8px;
    font-size: 15px;
    background: #fafafa;
    border: 1px solid #e5e7eb;
}

/* Summary under the title */
.header-summary { font-size: 14px; color: #4b5563; margin: 0; }
.header-summary .count { font-weight: 600; color: #1d4ed8; }

/* Active file panel */
.active-file {
    background: #eff6ff;
    border: 1px solid #dbeafe;
    border-radius: 12px;
    padding: 14px;
}
.active-file-name { font-weight: 600; color: #1e40af; margin: 0; }
.progress-track {
    margin-top: 8px;
    background: #e5e7eb;
    height: 12px;
    border-radius: 9999px;
    overflow: hidden;
}
.progress-fill {
    background: #2563eb;
    height: 12px;
    border-radius: 9999px;
    transition: width 0.5s;
}
.progress-counts { font-size: 14px; color: #374151; margin: 8px 0 0 0; }

/* Buttons */
.success-btn { background: #16a34a !important; color: white !important; }
.primary-btn { background: #2563eb !important; color: white !important; }
.danger-btn { background: #ef4444 !important; color: white !important; }
.warning-btn { background: #f59e0b !important; color: white !important; }
"""


def get_global_css() -> str:
    """Return the global CSS."""
    return GLOBAL_CSS


def create_header(components: Dict[str, Any]) -> None:
    """Title, progress summary and the Download/Save buttons."""
    with gr.Row():
        with gr.Column(scale=4):
            gr.Markdown("# Abbreviation Corrector")
            components['header_summary'] = gr.HTML("")
        with gr.Column(scale=1, min_width=160):
            components['download_btn'] = gr.Button(
                "⬇️ Download",
                elem_classes=["success-btn"]
            )
        with gr.Column(scale=1, min_width=160):
            components['save_btn'] = gr.Button(
                "💾 Save",
                elem_classes=["primary-btn"]
            )

    components['download_file'] = gr.File(
        label="Corrected CSV",
        interactive=False,
        visible=False
    )
    components['status'] = gr.HTML('<div class="load-status">📁 Upload or load a CSV file to start</div>')


def create_file_section(components: Dict[str, Any]) -> None:
    """Upload box, file list and its Load/Delete actions."""
    with gr.Row():
        with gr.Column(scale=2):
            components['csv_upload'] = gr.File(
                label="📤 Upload CSV File",
                file_types=[".csv"],
                type="filepath",
                height=110
            )

        with gr.Column(scale=3):
            components['file_list'] = gr.Dropdown(
                choices=[],
                label="Files",
                info="Files in the storage bucket",
                interactive=True
            )
            with gr.Row():
                components['refresh_btn'] = gr.Button("🔄 Refresh", size="sm")
                components['load_btn'] = gr.Button("Load", size="sm", elem_classes=["primary-btn"])
                components['delete_btn'] = gr.Button("Delete", size="sm", elem_classes=["danger-btn"])

            with gr.Group(visible=False) as delete_confirm_group:
                components['delete_confirm_group'] = delete_confirm_group
                components['delete_prompt'] = gr.Markdown("")
                with gr.Row():
                    components['confirm_delete_btn'] = gr.Button("Delete", size="sm", elem_classes=["danger-btn"])
                    components['cancel_delete_btn'] = gr.Button("Cancel", size="sm")


def create_dataset_section(components: Dict[str, Any]) -> None:
    """Active file progress, tabs, the row table and the row editor."""
    components['progress_display'] = gr.HTML('<div class="active-file">No file loaded</div>')

    components['tab_selector'] = gr.Radio(
        choices=[(TAB_LABELS[TAB_NOT_COMPLETED], TAB_NOT_COMPLETED), (TAB_LABELS[TAB_COMPLETED], TAB_COMPLETED)],
        value=TAB_NOT_COMPLETED,
        show_label=False
    )

    with gr.Row():
        with gr.Column(scale=3):
            components['row_table'] = gr.Dataframe(
                headers=TABLE_HEADERS,
                datatype=["str"] * len(TABLE_HEADERS),
                interactive=False,
                wrap=True,
                label="Rows (click a row to edit it)"
            )

        with gr.Column(scale=2):
            gr.Markdown("### Edit Row")
            components['sentence_display'] = gr.Textbox(label="Sentence", interactive=False, lines=3)
            components['abbreviation_display'] = gr.Textbox(label="Abbrev.", interactive=False)
            components['long_form_editor'] = gr.Textbox(
                label="Long Form",
                placeholder="Expanded form of the abbreviation...",
                interactive=True
            )
            components['domain_editor'] = gr.Dropdown(
                choices=[("—", "")] + [(option, option) for option in DOMAIN_OPTIONS if option],
                value="",
                label="Domain",
                allow_custom_value=True,
                interactive=True
            )
            with gr.Row():
                components['toggle_btn'] = gr.Button("✔ Complete", elem_classes=["success-btn"])
                components['remove_btn'] = gr.Button("✖ Remove", elem_classes=["danger-btn"])

            with gr.Group(visible=False) as remove_confirm_group:
                components['remove_confirm_group'] = remove_confirm_group
                gr.Markdown("Remove this row?")
                with gr.Row():
                    components['confirm_remove_btn'] = gr.Button("Remove", size="sm", elem_classes=["danger-btn"])
                    components['cancel_remove_btn'] = gr.Button("Cancel", size="sm")


def create_main_layout() -> Dict[str, Any]:
    """
    Create the complete layout.

    Returns:
        Dictionary of all UI components keyed by name
    """
    components = {}

    create_header(components)
    create_file_section(components)
    create_dataset_section(components)

    return components
