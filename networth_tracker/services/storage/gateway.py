"""
Persistence Gateway

Loads and saves the whole application state as one JSON blob under one
fixed key.

CRITICAL: The gateway NEVER raises to its caller.
- load() returns an empty state on missing, unreadable or malformed data
- save() logs the failure and returns False
The in-memory state stays authoritative either way.
"""

from typing import Optional

from pydantic import ValidationError

from networth_tracker.audit import AuditLogger, get_audit_logger
from networth_tracker.config import DEFAULT_STORAGE_KEY
from networth_tracker.models.state import PersistedState
from networth_tracker.services.storage.interface import BlobStorageInterface


class PersistenceGateway:
    """Serializes PersistedState to and from a blob storage backend."""

    def __init__(
        self,
        storage: BlobStorageInterface,
        storage_key: str = DEFAULT_STORAGE_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._key = storage_key
        self._audit_logger = audit_logger or get_audit_logger()

    @property
    def storage_key(self) -> str:
        return self._key

    async def load(self) -> PersistedState:
        """
        Read the stored state.

        Returns an empty PersistedState when nothing is stored or the blob
        cannot be read or parsed.
        """
        try:
            raw = await self._storage.get_item(self._key)
        except Exception as e:
            self._audit_logger.log_load_failed(f"{type(e).__name__}: {e}")
            return PersistedState()

        if not raw:
            return PersistedState()

        try:
            state = PersistedState.model_validate_json(raw)
        except ValidationError as e:
            self._audit_logger.log_load_failed(
                f"Stored data is malformed ({e.error_count()} errors)"
            )
            return PersistedState()

        return state

    async def save(self, state: PersistedState) -> bool:
        """
        Write the full state, replacing whatever was stored.

        Returns True on success, False if the write failed (already logged).
        """
        try:
            payload = state.to_json()
            await self._storage.set_item(self._key, payload)
        except Exception as e:
            self._audit_logger.log_save_failed(f"{type(e).__name__}: {e}")
            return False

        self._audit_logger.log_state_saved(self._key, len(payload))
        return True
