"""
Account Form Validation

DESIGN DECISION: The store trusts its caller. All input checks live here,
at the form boundary, and run BEFORE an action is invoked:
- name must not be blank
- value must be a number >= 0 (thousands separators allowed), at most
  MAX_AMOUNT, with no more than two decimal places
- category must be chosen, and must belong to the selected type

IMPORTANT: Validation never silently fixes input beyond trimming the name
and stripping separators from the value. Everything else is reported back
to the user.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, ConfigDict

from networth_tracker.models.account import (
    AMOUNT_DECIMAL_PLACES,
    MAX_AMOUNT,
    Account,
    AccountDraft,
    AccountType,
    categories_for,
)
from networth_tracker.models.validation import ValidationIssue, ValidationResult


class AccountForm(BaseModel):
    """
    Raw add/edit form input, exactly as the user typed it.

    `value` is text; it only becomes a Decimal once validated.
    """
    model_config = ConfigDict(frozen=True)

    name: str = ""
    type: AccountType = AccountType.ASSET
    category: Optional[str] = None
    value: str = ""
    account_id: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountForm":
        """Prefill the form for editing an existing account."""
        return cls(
            name=account.name,
            type=account.type,
            category=account.category,
            value=str(account.value),
            account_id=account.id,
        )

    @property
    def is_editing(self) -> bool:
        return self.account_id is not None

    @property
    def categories(self) -> tuple[str, ...]:
        return categories_for(self.type)

    def with_type(self, account_type: AccountType) -> "AccountForm":
        """Switch type; the category is reset because its valid set changes."""
        account_type = AccountType(account_type)
        if account_type is self.type:
            return self
        return self.model_copy(update={"type": account_type, "category": None})


class FormValidationError(ValueError):
    """Raised when an invalid form is turned into a draft."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__("; ".join(issue.message for issue in result.issues))


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse user-entered money text ("12,500.50", "$300").

    Returns None if the text is not a finite number.
    """
    cleaned = text.strip().replace(",", "").replace(" ", "")
    if cleaned.startswith("$"):
        cleaned = cleaned[1:]
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


class AccountFormValidator:
    """Checks an AccountForm and turns valid forms into store input."""

    def validate(self, form: AccountForm) -> ValidationResult:
        issues: list[ValidationIssue] = []

        if not form.name.strip():
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Please enter an account name.",
            ))

        amount = parse_amount(form.value)
        if amount is None:
            issues.append(ValidationIssue(
                field="value",
                issue_type="invalid_format",
                message="Please enter a valid dollar amount (0 or greater).",
            ))
        elif amount < 0:
            issues.append(ValidationIssue(
                field="value",
                issue_type="negative",
                message="Value cannot be negative. Record debts as liabilities.",
            ))
        elif amount > MAX_AMOUNT:
            issues.append(ValidationIssue(
                field="value",
                issue_type="too_large",
                message=f"Value cannot be more than {MAX_AMOUNT:,}.",
            ))
        elif amount.normalize().as_tuple().exponent < -AMOUNT_DECIMAL_PLACES:
            issues.append(ValidationIssue(
                field="value",
                issue_type="too_precise",
                message="Value can have at most 2 decimal places.",
            ))

        if not form.category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please select a category.",
            ))
        elif form.category not in form.categories:
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_choice",
                message=f"'{form.category}' is not a {form.type.value} category.",
            ))

        return ValidationResult(issues=issues)

    def to_draft(self, form: AccountForm) -> AccountDraft:
        """
        Build the draft for add_account.

        Raises:
            FormValidationError: If the form has any errors
        """
        result = self.validate(form)
        if result.has_errors:
            raise FormValidationError(result)

        return AccountDraft(
            name=form.name.strip(),
            type=form.type,
            category=form.category,
            value=parse_amount(form.value),
        )

    def apply_to(self, form: AccountForm, account: Account) -> Account:
        """
        Merge a validated form into an existing account for update_account.

        Raises:
            FormValidationError: If the form has any errors
        """
        draft = self.to_draft(form)
        return account.model_copy(update=draft.model_dump())
