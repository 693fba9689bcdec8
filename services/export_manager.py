"""
ExportManager for saving and downloading corrected datasets.

Implements the save-naming policy and writes the full dataset either back
to storage or to a local file offered for download.
"""

import os
import logging
import tempfile
from typing import Optional

from .csv_codec import CsvCodec
from .row_store import RowStore
from .storage import BlobStorage
from utils.performance import get_monitor, measure_time

logger = logging.getLogger(__name__)

CSV_EXTENSION = ".csv"
DEFAULT_DOWNLOAD_BASE = "abbreviations"


def strip_csv_extension(file_name: str) -> str:
    """Drop one trailing .csv extension (case-insensitive)."""
    if file_name.lower().endswith(CSV_EXTENSION):
        return file_name[:-len(CSV_EXTENSION)]
    return file_name


def build_save_name(file_name: str, percent: int) -> str:
    """
    Name under which a dataset is saved back to storage.

    Examples:
        build_save_name("medical.csv", 100) -> "medical{corrected}.csv"
        build_save_name("medical.csv", 37) -> "medical{37%}.csv"
    """
    base = strip_csv_extension(file_name)
    if percent == 100:
        return f"{base}{{corrected}}{CSV_EXTENSION}"
    return f"{base}{{{percent}%}}{CSV_EXTENSION}"


def build_download_name(file_name: Optional[str]) -> str:
    """Name of the local download file: <base>-corrected.csv."""
    base = strip_csv_extension(file_name) if file_name else DEFAULT_DOWNLOAD_BASE
    return f"{base}-corrected{CSV_EXTENSION}"


class ExportManager:
    """
    Exports the full dataset of a RowStore.

    Both export paths serialize every row, never a filtered view.
    """

    def __init__(self, codec: Optional[CsvCodec] = None):
        self.codec = codec or CsvCodec()

    def export_text(self, store: RowStore) -> str:
        """Encode all rows of the store as CSV text."""
        return self.codec.encode(store.rows)

    def save_to_storage(self, storage: BlobStorage, active_file: Optional[str], store: RowStore) -> str:
        """
        Upload the dataset under the policy-derived name.

        Re-saving at the same progress overwrites the same blob.

        Returns:
            Name of the saved blob

        Raises:
            ValueError: If no file is active or there are no rows
            StorageError: If the upload fails
        """
        if not active_file:
            raise ValueError("No file loaded")
        if store.is_empty():
            raise ValueError("No rows loaded")

        progress = store.get_progress()
        new_name = build_save_name(active_file, progress.percent)

        with measure_time("storage_save"):
            storage.upload(new_name, self.export_text(store), overwrite=True)

        logger.info(f"Saved {active_file} as {new_name} ({progress.percent}% complete)")
        get_monitor().log_stats()
        return new_name

    def export_to_file(self, active_file: Optional[str], store: RowStore, directory: Optional[str] = None) -> str:
        """
        Write the dataset to a local CSV file for download.

        Args:
            active_file: Name of the loaded file, None falls back to a default name
            store: RowStore to export
            directory: Target directory (a fresh temporary directory by default)

        Returns:
            Path to the written file

        Raises:
            ValueError: If there are no rows
            PermissionError: If the file cannot be written
        """
        if store.is_empty():
            raise ValueError("No rows loaded")

        directory = directory or tempfile.mkdtemp(prefix="abbrev-export-")
        output_path = os.path.join(directory, build_download_name(active_file))

        try:
            with open(output_path, "w", encoding="utf-8", newline="") as f:
                f.write(self.export_text(store))
        except PermissionError:
            raise PermissionError(f"Cannot write file: {output_path}")

        logger.info(f"Exported {len(store)} rows to {output_path}")
        return output_path
