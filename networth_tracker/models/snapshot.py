"""
Snapshot Models

A snapshot is a frozen capture of the totals and the full account list at
one moment.

CRITICAL: `accounts` is an independent copy, never a reference into the
live store. Editing or deleting an account later must not change any
past snapshot.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from networth_tracker.models.account import Account, Money


class Snapshot(BaseModel):
    """A point-in-time capture of net worth."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Unique snapshot ID"
    )
    date: datetime = Field(
        ...,
        description="Capture time"
    )
    net_worth: Money = Field(
        ...,
        description="Total assets minus total liabilities at capture time"
    )
    total_assets: Money = Field(
        ...,
        description="Sum of asset values at capture time"
    )
    total_liabilities: Money = Field(
        ...,
        description="Sum of liability values at capture time"
    )
    accounts: tuple[Account, ...] = Field(
        default=(),
        description="Copy of every account at capture time"
    )


class TrendPoint(BaseModel):
    """One point of a net worth trend chart."""
    model_config = ConfigDict(frozen=True)

    snapshot_id: str
    date: datetime
    net_worth: Decimal


class SnapshotChange(BaseModel):
    """
    Change of net worth between two snapshots.

    `change` is newer minus older, so a positive value is a gain.
    """
    model_config = ConfigDict(frozen=True)

    snapshot_id: str
    previous_snapshot_id: str
    change: Decimal

    @computed_field
    @property
    def is_gain(self) -> bool:
        return self.change >= 0
