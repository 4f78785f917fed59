"""
Audit Logger

DESIGN DECISION: Every state change and every persistence outcome is
logged. This provides:
1. Traceability of user changes
2. Debugging capability for silent save failures
3. A recent-activity view for the user

The audit logger:
- Is synchronous; it never touches storage, so it cannot block on I/O
- Keeps a bounded in-memory buffer of recent events
- Never raises into the action that triggered it
"""

import logging
from collections import deque
from typing import Optional

import structlog

from networth_tracker.models.account import Account
from networth_tracker.models.audit import AuditEvent, AuditEventBuilder
from networth_tracker.models.snapshot import Snapshot
from networth_tracker.models.state import PersistedState

RECENT_EVENTS_LIMIT = 200


def _configure_structlog(renderer) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog for local logging
_configure_structlog(structlog.processors.JSONRenderer())


def configure_logging(level: str = "INFO", debug: bool = False) -> None:
    """
    Set the log level and output format.

    Call once at startup, before any component logs. Debug mode switches
    from JSON lines to the human-readable console renderer.
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))
    logging.getLogger().setLevel(getattr(logging, level))
    renderer = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer()
    )
    _configure_structlog(renderer)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory buffer of recent events (for the activity view)
    """

    def __init__(self, max_events: int = RECENT_EVENTS_LIMIT):
        self._logger = structlog.get_logger("networth_tracker.audit")
        self._recent: deque[AuditEvent] = deque(maxlen=max_events)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and remember it."""
        log_dict = event.to_log_dict()
        severity = event.severity.value

        if severity == "error":
            self._logger.error("audit_event", **log_dict)
        elif severity == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif severity == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._recent.append(event)

    def recent_events(self, limit: int = 50) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._recent))[:limit]

    def log_state_loaded(self, state: PersistedState) -> None:
        self.log(AuditEventBuilder.state_loaded(
            account_count=len(state.accounts),
            snapshot_count=len(state.snapshots),
        ))

    def log_load_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.state_load_failed(error_message))

    def log_account_added(self, account: Account) -> None:
        self.log(AuditEventBuilder.account_added(
            account_id=account.id,
            name=account.name,
            account_type=account.type.value,
            value=str(account.value),
        ))

    def log_account_updated(self, account: Account) -> None:
        self.log(AuditEventBuilder.account_updated(
            account_id=account.id,
            name=account.name,
            value=str(account.value),
        ))

    def log_account_deleted(self, account_id: str) -> None:
        self.log(AuditEventBuilder.account_deleted(account_id))

    def log_snapshot_taken(self, snapshot: Snapshot) -> None:
        self.log(AuditEventBuilder.snapshot_taken(
            snapshot_id=snapshot.id,
            net_worth=str(snapshot.net_worth),
            account_count=len(snapshot.accounts),
        ))

    def log_snapshot_deleted(self, snapshot_id: str) -> None:
        self.log(AuditEventBuilder.snapshot_deleted(snapshot_id))

    def log_action_skipped(
        self,
        action: str,
        entity_type: str,
        entity_id: str,
    ) -> None:
        """Log a tolerated no-op (update/delete of an unknown ID)."""
        self.log(AuditEventBuilder.action_skipped(action, entity_type, entity_id))

    def log_state_saved(self, storage_key: str, payload_size: int) -> None:
        self.log(AuditEventBuilder.state_saved(storage_key, payload_size))

    def log_save_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(error_message))

    def log_save_skipped(self, action: str) -> None:
        self.log(AuditEventBuilder.save_skipped_while_loading(action))


_default_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Process-wide audit logger shared by components that aren't given one."""
    global _default_logger
    if _default_logger is None:
        _default_logger = AuditLogger()
    return _default_logger
