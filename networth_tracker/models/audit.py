"""
Audit Models for Net Worth Tracker

Every state change and every persistence outcome is logged as a typed
event. This provides:
1. A readable history of what the user changed and when
2. Debugging information when a save silently fails
3. Visibility into skipped actions (stale IDs) without bothering the user

DESIGN DECISION: Audit events are logged, never raised. Nothing in this
module can interrupt an action.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from networth_tracker.ids import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    STATE_LOADED = "state_loaded"
    STATE_LOAD_FAILED = "state_load_failed"

    # Accounts
    ACCOUNT_ADDED = "account_added"
    ACCOUNT_UPDATED = "account_updated"
    ACCOUNT_DELETED = "account_deleted"

    # Snapshots
    SNAPSHOT_TAKEN = "snapshot_taken"
    SNAPSHOT_DELETED = "snapshot_deleted"

    # Stale IDs (tolerated no-ops)
    ACTION_SKIPPED = "action_skipped"

    # Persistence
    STATE_SAVED = "state_saved"
    SAVE_FAILED = "save_failed"
    SAVE_SKIPPED_WHILE_LOADING = "save_skipped_while_loading"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('account', 'snapshot', 'state')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.account_added(account_id, name, "asset", "5000")
        event = AuditEventBuilder.save_failed("disk full")
    """

    @staticmethod
    def state_loaded(account_count: int, snapshot_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOADED,
            entity_type="state",
            description=(
                f"Loaded {account_count} accounts and {snapshot_count} snapshots"
            ),
            details={
                "account_count": account_count,
                "snapshot_count": snapshot_count,
            },
        )

    @staticmethod
    def state_load_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="state",
            description="Failed to load stored data, starting empty",
            error_message=error_message,
        )

    @staticmethod
    def account_added(
        account_id: str,
        name: str,
        account_type: str,
        value: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_ADDED,
            entity_type="account",
            entity_id=account_id,
            description=f"Account added: {name}",
            details={
                "type": account_type,
                "value": value,
            },
            is_user_action=True,
        )

    @staticmethod
    def account_updated(account_id: str, name: str, value: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_UPDATED,
            entity_type="account",
            entity_id=account_id,
            description=f"Account updated: {name}",
            details={"value": value},
            is_user_action=True,
        )

    @staticmethod
    def account_deleted(account_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_DELETED,
            entity_type="account",
            entity_id=account_id,
            description="Account deleted",
            is_user_action=True,
        )

    @staticmethod
    def snapshot_taken(
        snapshot_id: str,
        net_worth: str,
        account_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_TAKEN,
            entity_type="snapshot",
            entity_id=snapshot_id,
            description=f"Snapshot taken with net worth {net_worth}",
            details={
                "net_worth": net_worth,
                "account_count": account_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def snapshot_deleted(snapshot_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_DELETED,
            entity_type="snapshot",
            entity_id=snapshot_id,
            description="Snapshot deleted",
            is_user_action=True,
        )

    @staticmethod
    def action_skipped(action: str, entity_type: str, entity_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACTION_SKIPPED,
            severity=AuditSeverity.DEBUG,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{action} skipped: no {entity_type} with this ID",
            details={"action": action},
            is_user_action=True,
        )

    @staticmethod
    def state_saved(storage_key: str, payload_size: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="state",
            description="State saved",
            details={
                "storage_key": storage_key,
                "payload_size": payload_size,
            },
        )

    @staticmethod
    def save_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="state",
            description="Failed to save state; in-memory data is still current",
            error_message=error_message,
        )

    @staticmethod
    def save_skipped_while_loading(action: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_SKIPPED_WHILE_LOADING,
            severity=AuditSeverity.WARNING,
            entity_type="state",
            description=f"{action} applied before load finished; not saved",
            details={"action": action},
        )
