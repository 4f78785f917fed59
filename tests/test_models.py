"""
Tests for Net Worth Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, formatting)
2. Integration tests for flows (store over in-memory storage)
3. No real storage backends or network calls in tests
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import ValidationError

from networth_tracker.models import (
    ASSET_CATEGORIES,
    LIABILITY_CATEGORIES,
    MAX_AMOUNT,
    Account,
    AccountDraft,
    AccountType,
    AppState,
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    PersistedState,
    Snapshot,
    SnapshotChange,
    ValidationIssue,
    ValidationResult,
    categories_for,
)

NOW = datetime(2024, 6, 1, 8, 30, tzinfo=timezone.utc)


def make_account(**overrides) -> Account:
    fields = dict(
        id="acc1",
        name="Chase Savings",
        type=AccountType.ASSET,
        category="Cash & Savings",
        value=Decimal("5000"),
        created_at=NOW,
        updated_at=NOW,
    )
    fields.update(overrides)
    return Account(**fields)


class TestAccountModels:
    """Tests for account-related Pydantic models."""

    def test_account_creation(self):
        account = make_account()
        assert account.name == "Chase Savings"
        assert account.is_asset is True
        assert account.signed_value == Decimal("5000")

    def test_liability_signed_value_is_negative(self):
        account = make_account(type=AccountType.LIABILITY, category="Credit Card")
        assert account.is_asset is False
        assert account.signed_value == Decimal("-5000")

    def test_rejects_negative_value(self):
        """Owed amounts are recorded as positive liability values."""
        with pytest.raises(ValidationError):
            make_account(value=Decimal("-1"))

    def test_zero_value_allowed(self):
        assert make_account(value=Decimal("0")).value == 0

    def test_rejects_value_above_largest_amount(self):
        assert make_account(value=MAX_AMOUNT).value == MAX_AMOUNT
        with pytest.raises(ValidationError):
            make_account(value=Decimal("1e400"))

    def test_largest_amount_round_trips_through_json(self):
        account = make_account(value=MAX_AMOUNT)
        loaded = Account.model_validate_json(account.model_dump_json(by_alias=True))
        assert loaded == account

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            make_account(type="equity")

    def test_accounts_are_frozen(self):
        account = make_account()
        with pytest.raises(ValidationError):
            account.value = Decimal("1")

    def test_camel_case_aliases(self):
        account = Account.model_validate({
            "id": "acc2",
            "name": "Visa",
            "type": "liability",
            "category": "Credit Card",
            "value": 99.5,
            "createdAt": "2024-06-01T08:30:00Z",
            "updatedAt": "2024-06-01T08:30:00Z",
        })
        assert account.created_at == NOW
        dumped = account.model_dump(mode="json", by_alias=True)
        assert dumped["createdAt"].startswith("2024-06-01T08:30:00")
        assert dumped["value"] == 99.5

    def test_draft_has_no_identity(self):
        draft = AccountDraft(name="Car", type=AccountType.ASSET, value=Decimal("8000"))
        assert draft.category is None
        assert "id" not in draft.model_dump()

    def test_categories_for_each_type(self):
        assert categories_for(AccountType.ASSET) == ASSET_CATEGORIES
        assert categories_for("liability") == LIABILITY_CATEGORIES
        assert "Retirement" in ASSET_CATEGORIES
        assert "Mortgage" in LIABILITY_CATEGORIES
        assert not set(ASSET_CATEGORIES) & set(LIABILITY_CATEGORIES)


class TestSnapshotModels:
    def test_snapshot_holds_account_copies(self):
        account = make_account()
        snapshot = Snapshot(
            id="snap1",
            date=NOW,
            net_worth=Decimal("5000"),
            total_assets=Decimal("5000"),
            total_liabilities=Decimal("0"),
            accounts=[account],
        )
        assert snapshot.accounts == (account,)

    def test_snapshot_change_gain_flag(self):
        gain = SnapshotChange(snapshot_id="b", previous_snapshot_id="a", change=Decimal("0"))
        loss = SnapshotChange(snapshot_id="b", previous_snapshot_id="a", change=Decimal("-1"))
        assert gain.is_gain is True
        assert loss.is_gain is False


class TestStateModels:
    def test_app_state_starts_loading_and_empty(self):
        state = AppState()
        assert state.is_loading is True
        assert state.accounts == ()
        assert state.snapshots == ()

    def test_to_persisted_drops_loading_flag(self):
        account = make_account()
        persisted = AppState(accounts=(account,), is_loading=False).to_persisted()
        assert persisted == PersistedState(accounts=(account,))
        assert "isLoading" not in persisted.to_json()
        assert "is_loading" not in persisted.to_json()


class TestValidationModels:
    def test_warnings_do_not_make_result_invalid(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="name", issue_type="odd", message="hm", severity="warning"),
        ])
        assert result.is_valid is True
        assert result.error_count == 0

    def test_messages_for_field(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="value", issue_type="negative", message="no"),
            ValidationIssue(field="name", issue_type="missing", message="name?"),
        ])
        assert result.has_errors is True
        assert result.messages_for("value") == ["no"]

    def test_rejects_unknown_severity(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.ACCOUNT_ADDED,
            description="Account added: Visa",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.account_added(
            account_id="acc1",
            name="Chase Savings",
            account_type="asset",
            value="5000",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "account_added"
        assert log_dict["entity_id"] == "acc1"
        assert log_dict["details"]["value"] == "5000"
        assert log_dict["is_user_action"] is True

    def test_builder_save_failed_is_error(self):
        event = AuditEventBuilder.save_failed("disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"
        assert event.is_user_action is False

    def test_builder_action_skipped(self):
        event = AuditEventBuilder.action_skipped("delete_account", "account", "gone")
        assert event.event_type == AuditEventType.ACTION_SKIPPED
        assert event.severity == AuditSeverity.DEBUG
        assert event.details == {"action": "delete_account"}
