"""
Account Models for Net Worth Tracker

An account is anything the user owns (asset) or owes (liability), with
its current value.

DESIGN DECISION: Liabilities store the owed amount as a positive number.
The sign is applied only when aggregating or displaying, so `value >= 0`
holds for every account.

Wire format uses camelCase keys (createdAt, updatedAt) so stored data
stays readable by other clients of the same blob.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


# Decimal in memory, plain JSON number on the wire
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]

# Largest account value. With at most two decimal places every amount up to
# here, and every total of a handful of them, survives the JSON number
# round trip unchanged.
MAX_AMOUNT = Decimal("999999999999.99")
AMOUNT_DECIMAL_PLACES = 2


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class AccountType(str, Enum):
    """Whether an account adds to or subtracts from net worth."""
    ASSET = "asset"
    LIABILITY = "liability"


class AssetCategory(str, Enum):
    """Categories offered for asset accounts."""
    CASH_SAVINGS = "Cash & Savings"
    CHECKING = "Checking Account"
    INVESTMENTS = "Investments"
    RETIREMENT = "Retirement"
    REAL_ESTATE = "Real Estate"
    VEHICLE = "Vehicle"
    CRYPTO = "Crypto"
    BUSINESS = "Business"
    OTHER = "Other Asset"


class LiabilityCategory(str, Enum):
    """Categories offered for liability accounts."""
    CREDIT_CARD = "Credit Card"
    MORTGAGE = "Mortgage"
    STUDENT_LOAN = "Student Loan"
    AUTO_LOAN = "Auto Loan"
    PERSONAL_LOAN = "Personal Loan"
    MEDICAL_DEBT = "Medical Debt"
    BUSINESS_LOAN = "Business Loan"
    OTHER = "Other Liability"


ASSET_CATEGORIES: tuple[str, ...] = tuple(c.value for c in AssetCategory)
LIABILITY_CATEGORIES: tuple[str, ...] = tuple(c.value for c in LiabilityCategory)


def categories_for(account_type: AccountType) -> tuple[str, ...]:
    """Valid categories for an account type, in display order."""
    if AccountType(account_type) is AccountType.ASSET:
        return ASSET_CATEGORIES
    return LIABILITY_CATEGORIES


# =============================================================================
# ACCOUNT MODELS
# =============================================================================

class AccountDraft(BaseModel):
    """
    The user-supplied part of an account.

    This is what the add/edit form hands to the store. It is trusted as-is:
    form-level checks (non-empty name, category membership) happen in
    `networth_tracker.validation` before a draft is built.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str = Field(
        ...,
        description="Display name, e.g. 'Chase Savings'"
    )
    type: AccountType = Field(
        ...,
        description="Asset or liability"
    )
    category: Optional[str] = Field(
        default=None,
        description="One of categories_for(type); unset after a type change"
    )
    value: Money = Field(
        ...,
        ge=0,
        le=MAX_AMOUNT,
        description="Current value in currency units (owed amount for liabilities)"
    )


class Account(AccountDraft):
    """
    A tracked account as held in the store.

    `id` and `created_at` never change after creation; `updated_at` is
    refreshed by every update.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Unique account ID"
    )
    created_at: datetime = Field(
        ...,
        description="When the account was added"
    )
    updated_at: datetime = Field(
        ...,
        description="Last update timestamp"
    )

    @property
    def is_asset(self) -> bool:
        return self.type is AccountType.ASSET

    @property
    def signed_value(self) -> Decimal:
        """Value with the sign it contributes to net worth."""
        return self.value if self.is_asset else -self.value
