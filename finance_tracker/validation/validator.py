"""
Transaction Draft Validation

DESIGN DECISION: Validation produces a ValidationResult instead of
showing anything to the user. The caller decides how to surface it:
the store raises ValidationError (carrying the result), and the UI
renders the issues however it likes.

Only the category blocks a submission. Description, amount and date
are taken as parsed; an unparseable amount is stored as NaN.

IMPORTANT: Validation NEVER silently fixes issues.
"""

import math

from finance_tracker.models.transaction import (
    TransactionCategory,
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
)


class ValidationError(Exception):
    """A draft was rejected. `result` holds the issues that caused it."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(issue.message for issue in result.errors)
        super().__init__(messages or "Validation failed")


class TransactionValidator:
    """Validates transaction drafts before they reach the store."""

    def validate(self, draft: TransactionDraft) -> ValidationResult:
        """
        Validate a draft.

        Errors:
        - category missing or blank

        Warnings (never block):
        - category outside the known set
        - amount that did not parse
        """
        issues = []

        if not draft.category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please select a category",
                severity="error",
            ))
        elif draft.category not in TransactionCategory.values():
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_value",
                message=f"Category '{draft.category}' is not one of the known categories",
                severity="warning",
            ))

        if math.isnan(draft.amount):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_a_number",
                message="Amount is not a number and will be stored as NaN",
                severity="warning",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return ValidationResult(
            is_valid=is_valid,
            issues=issues,
        )

    def check(self, draft: TransactionDraft) -> ValidationResult:
        """
        Validate and raise on errors.

        Raises:
            ValidationError: If the draft has any error-level issue
        """
        result = self.validate(draft)
        if not result.is_valid:
            raise ValidationError(result)
        return result

    @staticmethod
    def get_user_friendly_summary(result: ValidationResult) -> str:
        """One line per issue, errors first."""
        lines = [f"❌ {issue.message}" for issue in result.errors]
        lines.extend(f"⚠️ {issue.message}" for issue in result.warnings)
        return "\n".join(lines)
