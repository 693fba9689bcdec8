"""
End-to-end integration tests for complete workflow.

Tests the full workflow: Upload → Load → Edit → Complete → Save → Reload
"""

import warnings

import gradio as gr

from app import build_app
from models import ApplicationState, TAB_COMPLETED
from services import CsvCodec
from ui.event_handlers import (
    handle_upload,
    handle_load_file,
    handle_row_select,
    handle_update_field,
    handle_toggle,
    handle_tab_change,
    handle_save,
    render_dataset
)


def upload_and_load(tmp_path, storage, content, name="medical.csv"):
    """Helper to upload a CSV through the handler and load it."""
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")

    state, msg = handle_upload(str(path), ApplicationState(), storage)
    assert msg == f"✅ Uploaded {name}"

    state, msg = handle_load_file(name, state, storage)
    assert msg.startswith(f"✅ Loaded {name}")
    return state


def test_complete_workflow(tmp_path, storage, scenario_csv):
    """
    Test the whole correction of a file:
    Upload → Load → Edit → Complete every row → Save → Reload
    """
    state = upload_and_load(tmp_path, storage, scenario_csv)

    # Fill in the missing long form of CEO
    state = handle_row_select(1, state)
    state = handle_update_field("long_form", "Chief Executive Officer", state)

    # Complete the three pending rows; each leaves the view
    for _ in range(3):
        state = handle_row_select(0, state)
        state, msg = handle_toggle(state)
    assert msg == "✅ 4 of 4 completed"

    table, header_html, _ = render_dataset(state)
    assert len(table) == 0
    assert "(100%)" in header_html

    state, msg = handle_save(state, storage)
    assert msg == "✅ Saved as medical{corrected}.csv"
    assert state.files == ["medical.csv", "medical{corrected}.csv"]

    # The original upload is untouched
    assert storage.download_text("medical.csv") == scenario_csv

    # Reload the saved file
    state, _ = handle_load_file("medical{corrected}.csv", state, storage)
    state = handle_tab_change(TAB_COMPLETED, state)
    table, _, _ = render_dataset(state)

    assert list(table["Abbrev."]) == ["WHO", "NASA", "CEO", "GDP"]
    assert state.store.rows[2].long_form == "Chief Executive Officer"
    assert state.store.rows[0].domain == "Medical"


def test_partial_save_and_resave(tmp_path, storage, scenario_csv):
    """Test that saving the same progress twice overwrites one blob."""
    state = upload_and_load(tmp_path, storage, scenario_csv)

    state, first = handle_save(state, storage)
    state, second = handle_save(state, storage)

    assert first == second == "✅ Saved as medical{25%}.csv"
    assert state.files == ["medical.csv", "medical{25%}.csv"]

    # Re-saving a saved file keeps its suffix and adds the new one
    state, _ = handle_load_file("medical{25%}.csv", state, storage)
    state, msg = handle_save(state, storage)
    assert msg == "✅ Saved as medical{25%}{25%}.csv"


def test_saved_file_is_canonical(tmp_path, storage):
    """Test that loose flags and fallback headers are normalized on save."""
    content = (
        "sentence,abbr,long,domain,completed\n"
        "a,A,Alpha,Science,YES\n"
        "b,B,Beta,,0\n"
    )
    state = upload_and_load(tmp_path, storage, content, name="loose.csv")

    state, msg = handle_save(state, storage)

    assert msg == "✅ Saved as loose{50%}.csv"
    assert storage.download_text("loose{50%}.csv") == (
        "sentence,abbreviation,long_form,domain,completed\n"
        "a,A,Alpha,Science,true\n"
        "b,B,Beta,,false\n"
    )
    assert CsvCodec().decode(storage.download_text("loose{50%}.csv")) == state.store.rows


def test_build_app(storage):
    """Test that the interface builds without theme/css deprecation warnings."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        app = build_app(storage, list_limit=10)

    assert isinstance(app, gr.Blocks)
    deprecations = [
        str(w.message) for w in caught
        if "theme" in str(w.message) and "css" in str(w.message)
    ]
    assert deprecations == []
