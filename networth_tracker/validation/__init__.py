"""Form validation package."""

from networth_tracker.validation.validator import (
    AccountForm,
    AccountFormValidator,
    FormValidationError,
    parse_amount,
)

__all__ = ["AccountForm", "AccountFormValidator", "FormValidationError", "parse_amount"]
