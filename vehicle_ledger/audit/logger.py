"""
Audit Logger

Every repair applied to an incoming record (synthesized identifier,
placeholder name, dropped duplicate) and every entry validation outcome is
logged. The audit logger:
- Always writes a structured local log line
- Persists to an optional storage backend
- Never raises on storage failures (the failure is logged instead)
- Supports correlation IDs to trace related events
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from vehicle_ledger.config import AppSettings, AuditSettings, get_settings
from vehicle_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from vehicle_ledger.models.entries import ValidationResult
from vehicle_ledger.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    JsonLinesAuditStorage,
    StorageError,
)


def _build_processors(log_format: str = "json") -> list:
    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging
structlog.configure(
    processors=_build_processors(),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Apply log level and renderer from settings.

    Call once at process start, before the first log line: loggers are
    cached on first use.
    """
    settings = settings or get_settings().app
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )
    structlog.configure(processors=_build_processors(settings.log_format))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The configured audit storage (for persistence)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        enabled: bool = True,
        max_recent_events: int = 100,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
            enabled: When False, events are dropped without logging.
            max_recent_events: Upper bound for recent_events().
        """
        self._storage = storage
        self._enabled = enabled
        self._max_recent_events = max_recent_events
        self._logger = structlog.get_logger("vehicle_ledger.audit")

    @classmethod
    def from_settings(cls, settings: Optional[AuditSettings] = None) -> "AuditLogger":
        """Build a logger with the storage backend named in the settings."""
        settings = settings or get_settings().audit
        if settings.log_path:
            storage: AuditStorageInterface = JsonLinesAuditStorage(settings.log_path)
        else:
            storage = InMemoryAuditStorage()
        return cls(
            storage=storage,
            enabled=settings.enabled,
            max_recent_events=settings.max_recent_events,
        )

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        if not self._enabled:
            return True

        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except StorageError as e:
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent stored events, newest first."""
        if self._storage is None:
            return []
        limit = min(limit or self._max_recent_events, self._max_recent_events)
        return self._storage.get_recent_events(limit=limit)

    def log_vehicles_validated(
        self,
        received: int,
        returned: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a validate_vehicles run."""
        self.log(AuditEventBuilder.vehicles_validated(
            received=received,
            returned=returned,
            correlation_id=correlation_id,
        ))

    def log_vehicle_id_synthesized(
        self,
        temp_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a temporary identifier assigned to a vehicle."""
        self.log(AuditEventBuilder.vehicle_id_synthesized(
            temp_id=temp_id,
            correlation_id=correlation_id,
        ))

    def log_vehicle_name_defaulted(
        self,
        vehicle_id: str,
        name: str,
        original_name: object,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a placeholder name given to a vehicle."""
        self.log(AuditEventBuilder.vehicle_name_defaulted(
            vehicle_id=vehicle_id,
            name=name,
            original_name=original_name,
            correlation_id=correlation_id,
        ))

    def log_duplicates_dropped(
        self,
        entity_type: str,
        dropped_ids: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log records removed by de-duplication."""
        self.log(AuditEventBuilder.duplicate_records_dropped(
            entity_type=entity_type,
            dropped_ids=dropped_ids,
            correlation_id=correlation_id,
        ))

    def log_entry_validation(
        self,
        result: ValidationResult,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log the outcome of an entry validation."""
        if result.is_valid:
            event = AuditEventBuilder.entry_validation_passed(
                entry_type=result.entry_type,
                warning_count=len(result.warnings),
                correlation_id=correlation_id,
            )
        else:
            event = AuditEventBuilder.entry_validation_failed(
                entry_type=result.entry_type,
                issues=[issue.model_dump() for issue in result.issues],
                correlation_id=correlation_id,
            )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a batch operation and pass it through all
    subsequent calls.
    """
    return uuid4()
