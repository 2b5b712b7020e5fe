"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.transaction import (
    Transaction,
    TransactionCategory,
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
    parse_amount,
    today_iso,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "Transaction",
    "TransactionCategory",
    "TransactionDraft",
    "ValidationIssue",
    "ValidationResult",
    "parse_amount",
    "today_iso",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
