"""
Data Models Package

This package contains all Pydantic models used in the Net Worth Tracker.
All data flowing through the system must conform to these schemas.
"""

from networth_tracker.models.account import (
    ASSET_CATEGORIES,
    LIABILITY_CATEGORIES,
    MAX_AMOUNT,
    Account,
    AccountDraft,
    AccountType,
    AssetCategory,
    LiabilityCategory,
    Money,
    categories_for,
)
from networth_tracker.models.snapshot import Snapshot, SnapshotChange, TrendPoint
from networth_tracker.models.state import AppState, PersistedState
from networth_tracker.models.validation import ValidationIssue, ValidationResult
from networth_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Account models
    "ASSET_CATEGORIES",
    "LIABILITY_CATEGORIES",
    "MAX_AMOUNT",
    "Account",
    "AccountDraft",
    "AccountType",
    "AssetCategory",
    "LiabilityCategory",
    "Money",
    "categories_for",
    # Snapshot models
    "Snapshot",
    "SnapshotChange",
    "TrendPoint",
    # State models
    "AppState",
    "PersistedState",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
