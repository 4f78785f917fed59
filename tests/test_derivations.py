"""Tests for totals, category breakdown and change-over-time derivations."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from networth_tracker.derivations import (
    all_time_change,
    category_breakdown,
    change_since_previous,
    compute_totals,
    net_worth,
    partition_by_type,
    snapshot_changes,
    total_assets,
    total_liabilities,
    trend_series,
)
from networth_tracker.models import Account, AccountType, Snapshot

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def account(id: str, type: AccountType, value: str, category: str = "Other Asset") -> Account:
    return Account(
        id=id,
        name=id.title(),
        type=type,
        category=category,
        value=Decimal(value),
        created_at=T0,
        updated_at=T0,
    )


def snapshots_newest_first(*net_worths: str) -> list[Snapshot]:
    """Build snapshots from oldest to newest, returned newest first."""
    built = [
        Snapshot(
            id=f"s{i}",
            date=T0 + timedelta(days=i),
            net_worth=Decimal(nw),
            total_assets=Decimal(nw),
            total_liabilities=Decimal("0"),
        )
        for i, nw in enumerate(net_worths)
    ]
    return list(reversed(built))


class TestTotals:
    """total_assets / total_liabilities / net_worth."""

    def test_empty_accounts_are_all_zero(self):
        totals = compute_totals([])
        assert totals.total_assets == 0
        assert totals.total_liabilities == 0
        assert totals.net_worth == 0
        assert net_worth([]) == 0

    def test_sums_by_type(self):
        accounts = [
            account("cash", AccountType.ASSET, "100.10"),
            account("card", AccountType.LIABILITY, "40.05", "Credit Card"),
            account("house", AccountType.ASSET, "250000"),
        ]
        assert total_assets(accounts) == Decimal("250100.10")
        assert total_liabilities(accounts) == Decimal("40.05")
        assert net_worth(accounts) == Decimal("250060.05")

        totals = compute_totals(accounts)
        assert totals.net_worth == totals.total_assets - totals.total_liabilities

    def test_negative_net_worth(self):
        accounts = [
            account("cash", AccountType.ASSET, "10"),
            account("loan", AccountType.LIABILITY, "35000", "Student Loan"),
        ]
        assert compute_totals(accounts).net_worth == Decimal("-34990")

    def test_net_worth_accepts_generator(self):
        accounts = [account("cash", AccountType.ASSET, "7")]
        assert net_worth(a for a in accounts) == 7

    def test_partition_keeps_order(self):
        a1 = account("a1", AccountType.ASSET, "1")
        l1 = account("l1", AccountType.LIABILITY, "1", "Mortgage")
        a2 = account("a2", AccountType.ASSET, "1")
        groups = partition_by_type([a1, l1, a2])
        assert groups[AccountType.ASSET] == [a1, a2]
        assert groups[AccountType.LIABILITY] == [l1]


class TestCategoryBreakdown:
    def test_groups_in_first_seen_order_with_percent(self):
        accounts = [
            account("brokerage", AccountType.ASSET, "300", "Investments"),
            account("cash", AccountType.ASSET, "100", "Cash & Savings"),
            account("ira", AccountType.ASSET, "600", "Investments"),
            account("card", AccountType.LIABILITY, "50", "Credit Card"),
        ]
        shares = category_breakdown(accounts, AccountType.ASSET)

        assert [s.category for s in shares] == ["Investments", "Cash & Savings"]
        assert shares[0].total == Decimal("900")
        assert shares[0].percent == Decimal("90")
        assert shares[1].percent == Decimal("10")

    def test_zero_bucket_has_zero_percent(self):
        accounts = [account("cash", AccountType.ASSET, "0", "Cash & Savings")]
        shares = category_breakdown(accounts, AccountType.ASSET)
        assert shares[0].total == 0
        assert shares[0].percent == 0

    def test_no_accounts_of_type(self):
        accounts = [account("cash", AccountType.ASSET, "10")]
        assert category_breakdown(accounts, AccountType.LIABILITY) == []


class TestHistory:
    """Change-over-time over a newest-first snapshot list."""

    def test_change_against_next_older(self):
        snapshots = snapshots_newest_first("1000", "1500", "1200")
        change = change_since_previous(snapshots, 0)
        assert change.snapshot_id == "s2"
        assert change.previous_snapshot_id == "s1"
        assert change.change == Decimal("-300")
        assert change.is_gain is False

    def test_oldest_has_no_change(self):
        snapshots = snapshots_newest_first("1000", "1500")
        assert change_since_previous(snapshots, 1) is None

    def test_out_of_range_index(self):
        with pytest.raises(IndexError):
            change_since_previous([], 0)

    def test_snapshot_changes_aligned(self):
        snapshots = snapshots_newest_first("1000", "1500", "1200")
        changes = snapshot_changes(snapshots)
        assert [c.change if c else None for c in changes] == [
            Decimal("-300"),
            Decimal("500"),
            None,
        ]

    def test_all_time_change_uses_first_and_last(self):
        snapshots = snapshots_newest_first("1000", "5000", "2500")
        assert all_time_change(snapshots) == Decimal("1500")

    def test_all_time_change_window(self):
        snapshots = snapshots_newest_first("1000", "5000", "2500")
        assert all_time_change(snapshots, window=2) == Decimal("-2500")

    def test_all_time_change_needs_two(self):
        assert all_time_change([]) is None
        assert all_time_change(snapshots_newest_first("10")) is None

    def test_all_time_change_rejects_empty_window(self):
        with pytest.raises(ValueError):
            all_time_change(snapshots_newest_first("1", "2"), window=0)

    def test_trend_series_oldest_first_limited(self):
        snapshots = snapshots_newest_first("1", "2", "3", "4")
        points = trend_series(snapshots, limit=3)
        assert [p.snapshot_id for p in points] == ["s1", "s2", "s3"]
        assert [p.net_worth for p in points] == [2, 3, 4]

    def test_trend_series_does_not_sort_by_date(self):
        later = Snapshot(
            id="inserted-first", date=T0 + timedelta(days=10),
            net_worth=Decimal("1"), total_assets=Decimal("1"),
            total_liabilities=Decimal("0"),
        )
        earlier = Snapshot(
            id="inserted-second", date=T0,
            net_worth=Decimal("2"), total_assets=Decimal("2"),
            total_liabilities=Decimal("0"),
        )
        # newest-first by insertion, regardless of the dates
        points = trend_series([earlier, later])
        assert [p.snapshot_id for p in points] == ["inserted-first", "inserted-second"]
