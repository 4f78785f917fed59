"""
Services Package

External collaborators of the core: currently only storage.
"""

from networth_tracker.services.storage import (
    BlobStorageInterface,
    PersistenceGateway,
    SaveQueue,
    create_blob_storage,
)

__all__ = [
    "BlobStorageInterface",
    "PersistenceGateway",
    "SaveQueue",
    "create_blob_storage",
]
