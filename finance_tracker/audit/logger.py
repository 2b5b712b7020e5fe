"""
Audit Logger

DESIGN DECISION: Every mutation of the transaction list is logged.
This provides:
1. Traceability of adds, edits and deletes
2. Debugging capability when stored data turns out unreadable
3. A record of rejected form submissions

The audit logger:
- Is synchronous, like everything else in the tracker
- Never raises into the caller (logging must not break a save)
"""

import logging
from typing import Optional

import structlog

from finance_tracker.models.audit import AuditEvent, AuditSeverity


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route stdlib logging (and therefore structlog) to stderr at `level`.

    structlog only formats; the stdlib root logger decides what is emitted.
    Call once from the entrypoint.
    """
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger("finance_tracker").setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured local log. Events are kept in memory
    as well when `keep_history` is set.
    """

    def __init__(self, keep_history: bool = False):
        self._logger = structlog.get_logger("finance_tracker.audit")
        self._history: Optional[list[AuditEvent]] = [] if keep_history else None

    @property
    def history(self) -> list[AuditEvent]:
        """Events logged so far (empty unless `keep_history` was set)."""
        return list(self._history or [])

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the event could not be emitted.
        """
        log_dict = event.to_log_dict()

        if self._history is not None:
            self._history.append(event)

        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # A broken log handler must not abort the mutation being logged
            logging.getLogger(__name__).exception("audit log emit failed")
            return False

        return True
