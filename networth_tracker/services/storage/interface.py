"""
Abstract Storage Interface

DESIGN DECISION: The application state is stored as ONE opaque blob under
ONE fixed key. The backend only needs key-value semantics, which lets us:
1. Use a local JSON file by default
2. Use in-memory storage for testing
3. Use Google Sheets so the data is visible outside the app
4. Swap backends without touching the store or the gateway

Backends raise StorageError subclasses. The gateway above them is
responsible for catching, logging and discarding those errors.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStorageInterface(ABC):
    """
    Abstract key-value storage for serialized state.

    Any storage implementation (file, Google Sheets, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored string, or None if nothing is stored under the key

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """
        Store a blob under a key, replacing any previous value.

        Args:
            key: The storage key
            value: The serialized blob

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass


class SerializationError(StorageError):
    """State could not be converted to or from its stored form."""
    pass


class PayloadTooLargeError(StorageError):
    """The serialized state does not fit the backend's size limit."""
    pass
