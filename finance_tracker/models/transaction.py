"""
Core Data Models for Finance Tracker

These models define the schemas for all data flowing through the system.
They are designed to:
1. Give the stored record a single, explicit shape
2. Keep parsing of form input lenient (the form is the source of truth)
3. Be serializable to the storage blob and to logs

DESIGN DECISION: The sign of `amount` is the only income/expense
discriminator. There is deliberately no `type` field to drift out of sync.
"""

import datetime as dt
import math
import re
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionCategory(str, Enum):
    """
    Categories offered by the transaction form and the category filter.

    Income and expense categories share one list; the amount's sign decides
    which side of the ledger an entry lands on.
    """
    SALARY = "salary"
    FREELANCE = "freelance"
    INVESTMENT = "investment"
    FOOD = "food"
    HOUSING = "housing"
    TRANSPORTATION = "transportation"
    UTILITIES = "utilities"
    ENTERTAINMENT = "entertainment"
    HEALTHCARE = "healthcare"
    SHOPPING = "shopping"
    EDUCATION = "education"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        return [c.value for c in cls]


# =============================================================================
# LENIENT INPUT PARSING
# =============================================================================

# Leading numeric prefix, the way a browser's parseFloat reads "12.5abc".
_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:infinity|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?))",
    re.IGNORECASE,
)


def parse_amount(value: Any) -> float:
    """
    Parse a form amount into a float.

    Never raises: anything without a numeric prefix becomes NaN and is
    stored as-is.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return math.nan

    match = _FLOAT_PREFIX.match(value)
    if not match:
        return math.nan
    return float(match.group(1))


def today_iso() -> str:
    """Today's date in the stored date format."""
    return dt.date.today().isoformat()


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class TransactionDraft(BaseModel):
    """
    Unvalidated field values for an add or update.

    CRITICAL: Only `category` is checked (by the validator). Description,
    amount and date are accepted as parsed, matching the form's lenient
    behavior.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = ""
    amount: float = math.nan
    category: Optional[str] = None
    date: str = ""

    @classmethod
    def from_form(
        cls,
        description: Optional[str],
        amount: Any,
        category: Optional[Union[str, TransactionCategory]],
        date: Optional[Union[str, dt.date]],
    ) -> "TransactionDraft":
        """Build a draft from raw form values."""
        if isinstance(category, TransactionCategory):
            category = category.value
        if isinstance(date, dt.date):
            date = date.isoformat()

        return cls(
            description=description or "",
            amount=parse_amount(amount),
            category=category or None,
            date=date or "",
        )


class Transaction(BaseModel):
    """
    A single income or expense record.

    This is exactly the shape that is persisted:
    {id, description, amount, category, date}
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: int = Field(
        ...,
        description="Unique id minted from the creation time (epoch ms)"
    )
    description: str = Field(
        default="",
        description="Free text, may be empty"
    )
    amount: float = Field(
        ...,
        description="Positive = income, negative = expense, NaN if unparseable"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="One of the TransactionCategory values"
    )
    date: str = Field(
        ...,
        description="ISO calendar date (YYYY-MM-DD)"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def null_amount_is_nan(cls, v: Any) -> Any:
        """NaN is written to JSON as null; read it back as NaN."""
        if v is None:
            return math.nan
        return v

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def calendar_date(self) -> Optional[dt.date]:
        """The stored date as a date object, or None if it does not parse."""
        try:
            return dt.date.fromisoformat(self.date)
        except ValueError:
            return None

    def with_draft(self, draft: TransactionDraft) -> "Transaction":
        """Copy of this record with every field but `id` taken from `draft`."""
        return Transaction(
            id=self.id,
            description=draft.description,
            amount=draft.amount,
            category=draft.category,
            date=draft.date,
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'unknown_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a draft.

    Errors block the add/update; warnings are informational only.
    """

    validated_at: dt.datetime = Field(
        default_factory=dt.datetime.utcnow
    )
    is_valid: bool = Field(
        ...,
        description="True when no error-level issue was found"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]
