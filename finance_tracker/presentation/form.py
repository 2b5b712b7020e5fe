"""
Add/Edit Form State Machine

States:
- ADD  (initial state, and the state after every successful submit)
- EDIT (entered by start_edit; holds the id being edited)

Transitions:
- start_edit(id)      ADD/EDIT -> EDIT   (silently switches target)
- submit() success    ADD/EDIT -> ADD    (form reset, date = today)
- submit() rejected   no change          (issues returned to caller)
- submit() stale id   no change          (update target vanished)
- reset()             ADD/EDIT -> ADD
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.audit import AuditLogger
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.models.transaction import (
    Transaction,
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
    today_iso,
)
from finance_tracker.services.storage import NotFoundError
from finance_tracker.store import TransactionStore
from finance_tracker.validation import TransactionValidator, ValidationError


ADD_LABEL = "Add Transaction"
UPDATE_LABEL = "Update"


class FormMode(str, Enum):
    ADD = "add"
    EDIT = "edit"


class SubmitOutcome(str, Enum):
    ADDED = "added"
    UPDATED = "updated"
    REJECTED = "rejected"   # validation errors, nothing changed
    SKIPPED = "skipped"     # update target no longer exists, nothing changed


class FormModel(BaseModel):
    """Field values as the form holds them (amount is raw text)."""

    description: str = ""
    amount: str = ""
    category: str = ""
    date: str = Field(default_factory=today_iso)

    def to_draft(self) -> TransactionDraft:
        return TransactionDraft.from_form(
            description=self.description,
            amount=self.amount,
            category=self.category,
            date=self.date,
        )


class SubmitResult(BaseModel):
    """What happened to a submission; the UI decides how to show it."""

    outcome: SubmitOutcome
    transaction: Optional[Transaction] = None
    validation: Optional[ValidationResult] = None

    @property
    def ok(self) -> bool:
        return self.outcome in (SubmitOutcome.ADDED, SubmitOutcome.UPDATED)

    @property
    def errors(self) -> list[ValidationIssue]:
        return self.validation.errors if self.validation else []

    @property
    def warnings(self) -> list[ValidationIssue]:
        return self.validation.warnings if self.validation else []


def format_amount_input(amount: float) -> str:
    """Amount as it should appear in the text field ("" for NaN)."""
    if math.isnan(amount) or math.isinf(amount):
        return ""
    if amount.is_integer():
        return str(int(amount))
    return repr(amount)


def populate_form(record: Transaction, form: FormModel) -> FormModel:
    """Copy a record's editable fields into `form` and return it."""
    form.description = record.description
    form.amount = format_amount_input(record.amount)
    form.category = record.category
    form.date = record.date
    return form


class TransactionForm:
    """
    The add/edit form and its single editing target.

    Only one transaction can be edited at a time.
    """

    def __init__(
        self,
        store: TransactionStore,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self.model = FormModel()
        self._editing_id: Optional[int] = None

    @property
    def editing_id(self) -> Optional[int]:
        return self._editing_id

    @property
    def mode(self) -> FormMode:
        return FormMode.ADD if self._editing_id is None else FormMode.EDIT

    @property
    def submit_label(self) -> str:
        return ADD_LABEL if self.mode == FormMode.ADD else UPDATE_LABEL

    def reset(self) -> None:
        """Back to ADD mode with blank fields and today's date."""
        self.model = FormModel()
        self._editing_id = None

    def start_edit(self, transaction_id: int) -> bool:
        """
        Load a transaction into the form and switch to EDIT mode.

        Returns False (and changes nothing) if the id is unknown.
        """
        record = self._store.find_by_id(transaction_id)
        if record is None:
            return False

        self.model = populate_form(record, FormModel())
        self._editing_id = transaction_id
        self._audit_logger.log(AuditEventBuilder.edit_started(transaction_id))
        return True

    def cancel_edit(self) -> None:
        if self._editing_id is not None:
            self._audit_logger.log(AuditEventBuilder.edit_cancelled(self._editing_id))
        self.reset()

    def submit(self, model: Optional[FormModel] = None) -> SubmitResult:
        """
        Add or update from the current field values.

        Args:
            model: New field values; the current ones are used if omitted
        """
        if model is not None:
            self.model = model

        draft = self.model.to_draft()
        editing_id = self._editing_id

        try:
            if editing_id is None:
                transaction = self._store.add(draft)
                outcome = SubmitOutcome.ADDED
            else:
                transaction = self._store.update(editing_id, draft)
                outcome = SubmitOutcome.UPDATED
        except ValidationError as e:
            return SubmitResult(outcome=SubmitOutcome.REJECTED, validation=e.result)
        except NotFoundError:
            self._audit_logger.log(AuditEventBuilder.update_target_missing(editing_id))
            return SubmitResult(outcome=SubmitOutcome.SKIPPED)

        self.reset()
        return SubmitResult(
            outcome=outcome,
            transaction=transaction,
            validation=self._validator.validate(draft),
        )
