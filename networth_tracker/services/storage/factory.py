"""Backend selection from settings."""

from typing import Optional

from networth_tracker.config import StorageSettings, get_settings
from networth_tracker.services.storage.interface import BlobStorageInterface
from networth_tracker.services.storage.local import FileBlobStorage, InMemoryBlobStorage


def create_blob_storage(
    settings: Optional[StorageSettings] = None,
) -> BlobStorageInterface:
    """
    Build the configured blob storage backend.

    The Google Sheets backend is imported lazily so gspread is only needed
    when it is actually selected.
    """
    settings = settings or get_settings().storage

    if settings.backend == "memory":
        return InMemoryBlobStorage()
    if settings.backend == "google_sheets":
        from networth_tracker.services.storage.google_sheets import GoogleSheetsBlobStorage
        return GoogleSheetsBlobStorage()
    return FileBlobStorage(settings.data_dir)
