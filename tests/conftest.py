"""
Shared fixtures for Net Worth Tracker tests.

No real storage backends or wall-clock time in tests: stores get an
in-memory backend, a fake clock and predictable IDs.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

import pytest
import pytest_asyncio

from networth_tracker.audit import AuditLogger
from networth_tracker.models import AccountDraft, AccountType
from networth_tracker.services.storage import (
    InMemoryBlobStorage,
    PersistenceGateway,
    StorageError,
)
from networth_tracker.store import NetWorthStore


class FakeClock:
    """Returns a new timestamp one minute later on every call."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


class SequentialIds:
    """id-1, id-2, ..."""

    def __init__(self, prefix: str = "id"):
        self._prefix = prefix
        self._count = 0

    def __call__(self) -> str:
        self._count += 1
        return f"{self._prefix}-{self._count}"


class RecordingStorage(InMemoryBlobStorage):
    """In-memory storage that remembers every write in order."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        super().__init__(initial)
        self.writes: list[str] = []

    async def set_item(self, key: str, value: str) -> None:
        self.writes.append(value)
        await super().set_item(key, value)


class GatedStorage(RecordingStorage):
    """Writes block until `release` is set."""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()

    async def set_item(self, key: str, value: str) -> None:
        await self.release.wait()
        await super().set_item(key, value)


class FailingStorage(InMemoryBlobStorage):
    """Every read and/or write raises StorageError."""

    def __init__(self, fail_reads: bool = True, fail_writes: bool = True):
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageError("storage unavailable")
        return await super().get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("disk full")
        await super().set_item(key, value)


def make_store(
    storage,
    audit_logger: Optional[AuditLogger] = None,
    clock: Optional[FakeClock] = None,
) -> NetWorthStore:
    audit_logger = audit_logger or AuditLogger()
    gateway = PersistenceGateway(storage, audit_logger=audit_logger)
    return NetWorthStore(
        gateway,
        audit_logger=audit_logger,
        clock=clock or FakeClock(),
        id_factory=SequentialIds(),
    )


def asset(name: str = "Chase Savings", value: str = "5000",
          category: str = "Cash & Savings") -> AccountDraft:
    return AccountDraft(
        name=name,
        type=AccountType.ASSET,
        category=category,
        value=Decimal(value),
    )


def liability(name: str = "Visa", value: str = "1200",
              category: str = "Credit Card") -> AccountDraft:
    return AccountDraft(
        name=name,
        type=AccountType.LIABILITY,
        category=category,
        value=Decimal(value),
    )


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest_asyncio.fixture
async def store(storage, audit_logger):
    """A loaded (READY) store over empty recording storage."""
    store = make_store(storage, audit_logger)
    await store.load()
    yield store
    await store.close()
