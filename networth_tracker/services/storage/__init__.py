"""
Storage Services Package

Provides the blob storage interface, its implementations (file, memory,
Google Sheets), the persistence gateway and the single-writer save queue.
"""

from networth_tracker.services.storage.interface import (
    BlobStorageInterface,
    PayloadTooLargeError,
    SerializationError,
    StorageConnectionError,
    StorageError,
)
from networth_tracker.services.storage.local import FileBlobStorage, InMemoryBlobStorage
from networth_tracker.services.storage.gateway import PersistenceGateway
from networth_tracker.services.storage.writer import SaveQueue
from networth_tracker.services.storage.factory import create_blob_storage

__all__ = [
    # Interface
    "BlobStorageInterface",
    # Exceptions
    "PayloadTooLargeError",
    "SerializationError",
    "StorageConnectionError",
    "StorageError",
    # Implementations
    "FileBlobStorage",
    "InMemoryBlobStorage",
    # Gateway and writer
    "PersistenceGateway",
    "SaveQueue",
    "create_blob_storage",
]
