"""
Data Models Package

Pydantic models for identifiers, entry payloads, validation results and
audit events.
"""

from vehicle_ledger.models.identifier import (
    CLIENT_ID_FIELD,
    DB_ID_FIELD,
    EntityRecord,
    Identifier,
    OpaqueRef,
    PlainNumber,
    PlainString,
    as_mapping,
    canonical_id,
    is_usable_id,
    stringify_id,
    to_identifier,
)
from vehicle_ledger.models.entries import (
    Category,
    ExpenseEntry,
    FinancialEntry,
    FuelEntry,
    IncomeEntry,
    ValidationIssue,
    ValidationResult,
)
from vehicle_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Identifier models
    "CLIENT_ID_FIELD",
    "DB_ID_FIELD",
    "EntityRecord",
    "Identifier",
    "OpaqueRef",
    "PlainNumber",
    "PlainString",
    "as_mapping",
    "canonical_id",
    "is_usable_id",
    "stringify_id",
    "to_identifier",
    # Entry models
    "Category",
    "ExpenseEntry",
    "FinancialEntry",
    "FuelEntry",
    "IncomeEntry",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
