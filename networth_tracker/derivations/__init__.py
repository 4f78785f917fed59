"""Pure read-only derivations over accounts and snapshots."""

from networth_tracker.derivations.history import (
    all_time_change,
    change_since_previous,
    recent_window,
    snapshot_changes,
    trend_series,
)
from networth_tracker.derivations.totals import (
    CategoryShare,
    Totals,
    category_breakdown,
    compute_totals,
    net_worth,
    partition_by_type,
    total_assets,
    total_for,
    total_liabilities,
)

__all__ = [
    "CategoryShare",
    "Totals",
    "all_time_change",
    "category_breakdown",
    "change_since_previous",
    "compute_totals",
    "net_worth",
    "partition_by_type",
    "recent_window",
    "snapshot_changes",
    "total_assets",
    "total_for",
    "total_liabilities",
    "trend_series",
]
