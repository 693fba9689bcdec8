"""Business logic services for the Abbreviation Corrector."""

from .csv_codec import CsvCodec
from .row_store import RowStore
from .export_manager import ExportManager, build_save_name, build_download_name
from .storage import BlobStorage, BlobInfo, LocalBlobStorage, S3BlobStorage, StorageError, get_storage

__all__ = [
    "CsvCodec",
    "RowStore",
    "ExportManager",
    "build_save_name",
    "build_download_name",
    "BlobStorage",
    "BlobInfo",
    "LocalBlobStorage",
    "S3BlobStorage",
    "StorageError",
    "get_storage",
]
