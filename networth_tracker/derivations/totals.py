"""
Derivation Engine

DESIGN DECISION: Totals are DERIVED, never stored.
Every read recomputes from the current accounts. At personal-finance
scale this is instant, and there is no cache that could drift out of
sync with the store.

All functions here are pure: same accounts in, same numbers out.
"""

from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel, ConfigDict, computed_field

from networth_tracker.models.account import Account, AccountType

ZERO = Decimal("0")


class Totals(BaseModel):
    """Aggregate totals for one set of accounts."""
    model_config = ConfigDict(frozen=True)

    total_assets: Decimal = ZERO
    total_liabilities: Decimal = ZERO

    @computed_field
    @property
    def net_worth(self) -> Decimal:
        return self.total_assets - self.total_liabilities


class CategoryShare(BaseModel):
    """One category's share of an asset or liability bucket."""
    model_config = ConfigDict(frozen=True)

    category: str
    total: Decimal
    percent: Decimal


def total_for(accounts: Iterable[Account], account_type: AccountType) -> Decimal:
    """Sum of values of all accounts of one type."""
    return sum(
        (account.value for account in accounts if account.type is account_type),
        ZERO,
    )


def total_assets(accounts: Iterable[Account]) -> Decimal:
    return total_for(accounts, AccountType.ASSET)


def total_liabilities(accounts: Iterable[Account]) -> Decimal:
    return total_for(accounts, AccountType.LIABILITY)


def net_worth(accounts: Iterable[Account]) -> Decimal:
    """Total assets minus total liabilities. May be negative."""
    accounts = list(accounts)
    return total_assets(accounts) - total_liabilities(accounts)


def compute_totals(accounts: Iterable[Account]) -> Totals:
    """All three totals in one pass over the accounts."""
    assets = ZERO
    liabilities = ZERO
    for account in accounts:
        if account.type is AccountType.ASSET:
            assets += account.value
        else:
            liabilities += account.value
    return Totals(total_assets=assets, total_liabilities=liabilities)


def partition_by_type(
    accounts: Iterable[Account],
) -> dict[AccountType, list[Account]]:
    """Split accounts into assets and liabilities, keeping insertion order."""
    groups: dict[AccountType, list[Account]] = {
        AccountType.ASSET: [],
        AccountType.LIABILITY: [],
    }
    for account in accounts:
        groups[account.type].append(account)
    return groups


def category_breakdown(
    accounts: Iterable[Account],
    account_type: AccountType,
) -> list[CategoryShare]:
    """
    Per-category totals for one account type.

    Categories appear in the order they are first seen. Accounts without
    a category are grouped under "Uncategorized". Percentages are of the
    bucket total and are 0 when the bucket total is 0.
    """
    sums: dict[str, Decimal] = {}
    for account in accounts:
        if account.type is not account_type:
            continue
        key = account.category or "Uncategorized"
        sums[key] = sums.get(key, ZERO) + account.value

    bucket = sum(sums.values(), ZERO)
    return [
        CategoryShare(
            category=category,
            total=total,
            percent=(total / bucket * 100) if bucket > 0 else ZERO,
        )
        for category, total in sums.items()
    ]
