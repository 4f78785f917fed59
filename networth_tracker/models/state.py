"""
Application State Models

`PersistedState` is the wire object written to storage as one blob.
`AppState` is what the store holds in memory: the same two collections
plus the loading flag that gates persistence.
"""

from pydantic import BaseModel, ConfigDict, Field

from networth_tracker.models.account import Account
from networth_tracker.models.snapshot import Snapshot


class PersistedState(BaseModel):
    """
    The complete stored state.

    Missing keys load as empty lists, so partial blobs are tolerated.
    """
    model_config = ConfigDict(frozen=True)

    accounts: tuple[Account, ...] = Field(default=())
    snapshots: tuple[Snapshot, ...] = Field(
        default=(),
        description="Newest first"
    )

    def to_json(self) -> str:
        """Serialize with wire (camelCase) field names."""
        return self.model_dump_json(by_alias=True)


class AppState(BaseModel):
    """
    In-memory application state.

    Frozen: every action produces a new AppState, so readers always see a
    consistent pair of collections.
    """
    model_config = ConfigDict(frozen=True)

    accounts: tuple[Account, ...] = ()
    snapshots: tuple[Snapshot, ...] = ()
    is_loading: bool = True

    def to_persisted(self) -> PersistedState:
        return PersistedState(accounts=self.accounts, snapshots=self.snapshots)
