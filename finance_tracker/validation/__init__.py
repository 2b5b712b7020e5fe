"""Validation package."""

from finance_tracker.validation.validator import TransactionValidator, ValidationError

__all__ = ["TransactionValidator", "ValidationError"]
