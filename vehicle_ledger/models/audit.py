"""
Audit Models for Vehicle Ledger

Records arrive from the database and from clients in every possible shape,
and the identifier and validation layers repair what they can instead of
rejecting it. Every repair is described by an audit event so that a
placeholder name in the UI can be traced back to the record that lacked
one.

Audit logs are append-only.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Vehicle repairs
    VEHICLES_VALIDATED = "vehicles_validated"
    VEHICLE_ID_SYNTHESIZED = "vehicle_id_synthesized"
    VEHICLE_NAME_DEFAULTED = "vehicle_name_defaulted"

    # Collection clean-up
    DUPLICATE_RECORDS_DROPPED = "duplicate_records_dropped"

    # Entry validation
    ENTRY_VALIDATION_PASSED = "entry_validation_passed"
    ENTRY_VALIDATION_FAILED = "entry_validation_failed"


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

    `entity_id` is the canonical string identifier of the record involved,
    since records carry database and client identifiers alike.
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

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'vehicle', 'fuel_entry')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Canonical identifier of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one validate_vehicles call)"
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

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
        }

    def to_json_line(self) -> str:
        """One line of the append-only JSON-lines audit file."""
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False)


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.vehicle_id_synthesized(temp_id, correlation_id)
        event = AuditEventBuilder.vehicles_validated(3, 2, correlation_id)
    """

    @staticmethod
    def vehicles_validated(
        received: int,
        returned: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VEHICLES_VALIDATED,
            entity_type="vehicle",
            correlation_id=correlation_id,
            description=f"Validated {received} vehicles, {returned} usable",
            details={
                "received": received,
                "returned": returned,
                "dropped": received - returned,
            },
        )

    @staticmethod
    def vehicle_id_synthesized(
        temp_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VEHICLE_ID_SYNTHESIZED,
            severity=AuditSeverity.WARNING,
            entity_type="vehicle",
            entity_id=temp_id,
            correlation_id=correlation_id,
            description="Vehicle had no identifier, temporary one assigned",
            details={
                "temp_id": temp_id,
            },
        )

    @staticmethod
    def vehicle_name_defaulted(
        vehicle_id: str,
        name: str,
        original_name: Any,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VEHICLE_NAME_DEFAULTED,
            severity=AuditSeverity.WARNING,
            entity_type="vehicle",
            entity_id=vehicle_id or None,
            correlation_id=correlation_id,
            description=f"Vehicle name replaced with placeholder: {name}",
            details={
                "name": name,
                "original_name": repr(original_name),
            },
        )

    @staticmethod
    def duplicate_records_dropped(
        entity_type: str,
        dropped_ids: list[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DUPLICATE_RECORDS_DROPPED,
            entity_type=entity_type,
            correlation_id=correlation_id,
            description=f"Dropped {len(dropped_ids)} duplicate {entity_type} records",
            details={
                "dropped_ids": dropped_ids,
            },
        )

    @staticmethod
    def entry_validation_passed(
        entry_type: str,
        warning_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_VALIDATION_PASSED,
            entity_type=entry_type,
            correlation_id=correlation_id,
            description=f"{entry_type} passed validation with {warning_count} warnings",
            details={
                "warning_count": warning_count,
            },
        )

    @staticmethod
    def entry_validation_failed(
        entry_type: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=entry_type,
            correlation_id=correlation_id,
            description=f"{entry_type} failed validation with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )
