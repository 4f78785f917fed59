"""
State Container for Net Worth Tracker

This module owns the application state and is the ONLY place it changes.

Lifecycle:
1. LOADING  - created empty; nothing is saved in this phase, so the empty
              initial state can never overwrite stored data
2. READY    - entered exactly once, when the stored state has been loaded
              (or failed to load, which counts as loading an empty state)

In READY, every action:
- replaces the in-memory AppState synchronously (readers see it at once)
- enqueues a save of the FULL state on the single-writer SaveQueue
- returns without waiting for the save

Totals are never stored; they are recomputed from the accounts on every
read. Update/delete of an unknown ID is a tolerated no-op.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional

from networth_tracker.audit import AuditLogger, get_audit_logger
from networth_tracker.config import get_settings
from networth_tracker.derivations.totals import Totals, compute_totals
from networth_tracker.ids import generate_id, utc_now
from networth_tracker.models.account import Account, AccountDraft
from networth_tracker.models.snapshot import Snapshot
from networth_tracker.models.state import AppState, PersistedState
from networth_tracker.services.storage import (
    BlobStorageInterface,
    PersistenceGateway,
    SaveQueue,
    create_blob_storage,
)


class StorePhase(str, Enum):
    """Lifecycle phase of the store."""
    LOADING = "loading"
    READY = "ready"


class NetWorthStore:
    """
    Owns accounts and snapshots and exposes the actions that change them.

    Usage:
        store = create_store()
        await store.load()
        account = store.add_account(AccountDraft(name="Visa", ...))
        snapshot = store.take_snapshot()
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        save_queue: Optional[SaveQueue] = None,
    ):
        self._gateway = gateway
        self._audit_logger = audit_logger or get_audit_logger()
        self._clock = clock or utc_now
        self._new_id = id_factory or generate_id
        self._writer = save_queue or SaveQueue(gateway)
        self._state = AppState()
        self._load_started = False

    # =========================================================================
    # READ SURFACE
    # =========================================================================

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def phase(self) -> StorePhase:
        return StorePhase.LOADING if self._state.is_loading else StorePhase.READY

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def accounts(self) -> list[Account]:
        """Accounts in insertion order."""
        return list(self._state.accounts)

    @property
    def snapshots(self) -> list[Snapshot]:
        """Snapshots, newest first."""
        return list(self._state.snapshots)

    @property
    def totals(self) -> Totals:
        return compute_totals(self._state.accounts)

    @property
    def total_assets(self) -> Decimal:
        return self.totals.total_assets

    @property
    def total_liabilities(self) -> Decimal:
        return self.totals.total_liabilities

    @property
    def net_worth(self) -> Decimal:
        return self.totals.net_worth

    def get_account(self, account_id: str) -> Optional[Account]:
        index = self._account_index(account_id)
        return None if index is None else self._state.accounts[index]

    def get_snapshot(self, snapshot_id: str) -> Optional[Snapshot]:
        for snapshot in self._state.snapshots:
            if snapshot.id == snapshot_id:
                return snapshot
        return None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def load(self) -> None:
        """
        Load stored state and move to READY. Runs at most once.

        Anything changed while still loading is replaced by the loaded data.
        Must be awaited on the event loop that will run the save writer.
        """
        if self._load_started:
            return
        self._load_started = True

        try:
            data = await self._gateway.load()
        except Exception as e:
            self._audit_logger.log_load_failed(f"{type(e).__name__}: {e}")
            data = PersistedState()

        self._state = AppState(
            accounts=data.accounts,
            snapshots=data.snapshots,
            is_loading=False,
        )
        self._audit_logger.log_state_loaded(data)
        self._writer.start()

    async def flush(self) -> None:
        """Wait for every save issued so far to finish."""
        await self._writer.drain()

    async def close(self) -> None:
        """Flush pending saves and stop the writer."""
        await self._writer.stop()

    def _commit(self, state: AppState, action: str) -> None:
        self._state = state
        if state.is_loading:
            self._audit_logger.log_save_skipped(action)
            return
        try:
            self._writer.submit(state.to_persisted())
        except RuntimeError as e:
            # Writer loop gone (e.g. during shutdown); memory stays current
            self._audit_logger.log_save_failed(str(e))

    # =========================================================================
    # ACCOUNT ACTIONS
    # =========================================================================

    def _account_index(self, account_id: str) -> Optional[int]:
        for idx, account in enumerate(self._state.accounts):
            if account.id == account_id:
                return idx
        return None

    def _fresh_account_id(self) -> str:
        account_id = self._new_id()
        while self._account_index(account_id) is not None:
            account_id = self._new_id()
        return account_id

    def add_account(self, draft: AccountDraft) -> Account:
        """
        Create an account from a draft and append it.

        The draft is trusted; form checks happen before this is called.
        """
        now = self._clock()
        account = Account(
            **draft.model_dump(include=set(AccountDraft.model_fields)),
            id=self._fresh_account_id(),
            created_at=now,
            updated_at=now,
        )
        self._commit(
            self._state.model_copy(
                update={"accounts": self._state.accounts + (account,)}
            ),
            "add_account",
        )
        self._audit_logger.log_account_added(account)
        return account

    def update_account(self, account: Account) -> Optional[Account]:
        """
        Replace the stored account with the same ID, keeping its position.

        Name, type, category and value all come from `account`;
        `updated_at` is refreshed and `created_at` is kept from the stored
        account. Returns None (and changes nothing) if the ID is unknown.
        """
        index = self._account_index(account.id)
        if index is None:
            self._audit_logger.log_action_skipped("update_account", "account", account.id)
            return None

        stored = self._state.accounts[index]
        updated = account.model_copy(
            update={"created_at": stored.created_at, "updated_at": self._clock()}
        )
        accounts = list(self._state.accounts)
        accounts[index] = updated
        self._commit(
            self._state.model_copy(update={"accounts": tuple(accounts)}),
            "update_account",
        )
        self._audit_logger.log_account_updated(updated)
        return updated

    def delete_account(self, account_id: str) -> bool:
        """
        Remove an account. Snapshots keep their own copies and are untouched.

        Returns False (and changes nothing) if the ID is unknown.
        """
        index = self._account_index(account_id)
        if index is None:
            self._audit_logger.log_action_skipped("delete_account", "account", account_id)
            return False

        accounts = self._state.accounts[:index] + self._state.accounts[index + 1:]
        self._commit(
            self._state.model_copy(update={"accounts": accounts}),
            "delete_account",
        )
        self._audit_logger.log_account_deleted(account_id)
        return True

    # =========================================================================
    # SNAPSHOT ACTIONS
    # =========================================================================

    def take_snapshot(self) -> Snapshot:
        """
        Capture current totals and a deep copy of every account.

        The new snapshot goes to the front of the list (newest first).
        """
        accounts = self._state.accounts
        totals = compute_totals(accounts)
        snapshot = Snapshot(
            id=self._new_id(),
            date=self._clock(),
            net_worth=totals.net_worth,
            total_assets=totals.total_assets,
            total_liabilities=totals.total_liabilities,
            accounts=tuple(account.model_copy(deep=True) for account in accounts),
        )
        self._commit(
            self._state.model_copy(
                update={"snapshots": (snapshot,) + self._state.snapshots}
            ),
            "take_snapshot",
        )
        self._audit_logger.log_snapshot_taken(snapshot)
        return snapshot

    def delete_snapshot(self, snapshot_id: str) -> bool:
        """Remove a snapshot. Returns False if the ID is unknown."""
        snapshots = tuple(s for s in self._state.snapshots if s.id != snapshot_id)
        if len(snapshots) == len(self._state.snapshots):
            self._audit_logger.log_action_skipped("delete_snapshot", "snapshot", snapshot_id)
            return False

        self._commit(
            self._state.model_copy(update={"snapshots": snapshots}),
            "delete_snapshot",
        )
        self._audit_logger.log_snapshot_deleted(snapshot_id)
        return True


def create_store(
    storage: Optional[BlobStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> NetWorthStore:
    """
    Factory function to wire a store from settings.

    Args:
        storage: Blob backend to use. Defaults to the configured backend
                 (see NETWORTH_STORAGE_BACKEND).

    Returns:
        A store in the LOADING phase; await store.load() before use.
    """
    settings = get_settings().storage
    audit_logger = audit_logger or get_audit_logger()
    gateway = PersistenceGateway(
        storage or create_blob_storage(settings),
        storage_key=settings.storage_key,
        audit_logger=audit_logger,
    )
    return NetWorthStore(gateway, audit_logger=audit_logger)
