"""
Audit Models for Finance Tracker

Every mutation of the transaction list, and every time storage hands us
something we could not use, is recorded as an audit event.
This provides:
1. Traceability of what changed and when
2. Debugging information when stored data goes missing
3. A record of rejected submissions

DESIGN DECISION: Audit events are emitted to the structured log only.
They are never written back into the transaction storage entry.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Store mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_REMOVED = "transaction_removed"
    TRANSACTION_REMOVE_MISSING = "transaction_remove_missing"

    # Rejected mutations
    VALIDATION_FAILED = "validation_failed"
    UPDATE_TARGET_MISSING = "update_target_missing"

    # Form lifecycle
    EDIT_STARTED = "edit_started"
    EDIT_CANCELLED = "edit_cancelled"

    # Persistence
    STORAGE_LOADED = "storage_loaded"
    STORAGE_CORRUPT = "storage_corrupt"
    STORAGE_SAVED = "storage_saved"
    SAVE_FAILED = "save_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
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

    # Context - which transaction is this about?
    transaction_id: Optional[int] = Field(
        default=None,
        description="Id of the transaction this event relates to"
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
            "transaction_id": self.transaction_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction_id, category, amount)
        event = AuditEventBuilder.storage_corrupt(key, reason)
    """

    @staticmethod
    def transaction_added(
        transaction_id: int,
        category: str,
        amount: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            transaction_id=transaction_id,
            description=f"Transaction added in {category}",
            details={
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        transaction_id: int,
        category: str,
        amount: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            transaction_id=transaction_id,
            description=f"Transaction {transaction_id} updated",
            details={
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_removed(
        transaction_id: int,
        found: bool,
    ) -> AuditEvent:
        if not found:
            return AuditEvent(
                event_type=AuditEventType.TRANSACTION_REMOVE_MISSING,
                transaction_id=transaction_id,
                description=f"Remove requested for unknown transaction {transaction_id}",
                is_user_action=True,
            )
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REMOVED,
            transaction_id=transaction_id,
            description=f"Transaction {transaction_id} removed",
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        operation: str,
        issues: list[dict],
        transaction_id: Optional[int] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            transaction_id=transaction_id,
            description=f"{operation.capitalize()} rejected with {len(issues)} issues",
            details={
                "operation": operation,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def update_target_missing(transaction_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UPDATE_TARGET_MISSING,
            severity=AuditSeverity.WARNING,
            transaction_id=transaction_id,
            description=f"Update skipped: transaction {transaction_id} no longer exists",
            is_user_action=True,
        )

    @staticmethod
    def edit_started(transaction_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_STARTED,
            severity=AuditSeverity.DEBUG,
            transaction_id=transaction_id,
            description=f"Editing transaction {transaction_id}",
            is_user_action=True,
        )

    @staticmethod
    def edit_cancelled(transaction_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_CANCELLED,
            severity=AuditSeverity.DEBUG,
            transaction_id=transaction_id,
            description=f"Stopped editing transaction {transaction_id}",
            is_user_action=True,
        )

    @staticmethod
    def storage_loaded(key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOADED,
            description=f"Loaded {count} transactions from '{key}'",
            details={
                "key": key,
                "count": count,
            },
        )

    @staticmethod
    def storage_corrupt(key: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_CORRUPT,
            severity=AuditSeverity.WARNING,
            description=f"Stored value under '{key}' is unreadable; starting empty",
            error_message=reason,
            details={
                "key": key,
            },
        )

    @staticmethod
    def storage_saved(key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_SAVED,
            severity=AuditSeverity.DEBUG,
            description=f"Saved {count} transactions to '{key}'",
            details={
                "key": key,
                "count": count,
            },
        )

    @staticmethod
    def save_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Failed to save transactions to '{key}'",
            error_message=error_message,
            details={
                "key": key,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
