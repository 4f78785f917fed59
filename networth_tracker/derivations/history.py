"""
Change-over-time derivations over the snapshot list.

Snapshots are kept newest first, so index i+1 is always the next older
snapshot of index i. Nothing here re-sorts by date; the list order is the
source of truth.
"""

from decimal import Decimal
from typing import Optional, Sequence

from networth_tracker.models.snapshot import Snapshot, SnapshotChange, TrendPoint


def change_since_previous(
    snapshots: Sequence[Snapshot],
    index: int,
) -> Optional[SnapshotChange]:
    """
    Net worth change of snapshots[index] against the next older snapshot.

    Returns None for the oldest snapshot (nothing to compare against).
    """
    if index < 0 or index >= len(snapshots):
        raise IndexError(f"No snapshot at index {index}")
    if index + 1 >= len(snapshots):
        return None

    current = snapshots[index]
    previous = snapshots[index + 1]
    return SnapshotChange(
        snapshot_id=current.id,
        previous_snapshot_id=previous.id,
        change=current.net_worth - previous.net_worth,
    )


def snapshot_changes(snapshots: Sequence[Snapshot]) -> list[Optional[SnapshotChange]]:
    """Change for every snapshot, aligned with the input order."""
    return [change_since_previous(snapshots, i) for i in range(len(snapshots))]


def recent_window(
    snapshots: Sequence[Snapshot],
    window: Optional[int] = None,
) -> list[Snapshot]:
    """The newest `window` snapshots (all of them when window is None)."""
    if window is not None and window < 1:
        raise ValueError("window must be at least 1")
    return list(snapshots if window is None else snapshots[:window])


def all_time_change(
    snapshots: Sequence[Snapshot],
    window: Optional[int] = None,
) -> Optional[Decimal]:
    """
    Newest net worth minus the oldest one in the window.

    Needs at least two snapshots; returns None otherwise.
    """
    selected = recent_window(snapshots, window)
    if len(selected) < 2:
        return None
    return selected[0].net_worth - selected[-1].net_worth


def trend_series(
    snapshots: Sequence[Snapshot],
    limit: Optional[int] = None,
) -> list[TrendPoint]:
    """Chart points for the newest `limit` snapshots, oldest first."""
    return [
        TrendPoint(snapshot_id=s.id, date=s.date, net_worth=s.net_worth)
        for s in reversed(recent_window(snapshots, limit))
    ]
