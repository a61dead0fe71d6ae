"""Services package."""

from vehicle_ledger.services.storage import (
    AuditStorageInterface,
    ConnectionError,
    InMemoryAuditStorage,
    JsonLinesAuditStorage,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "ConnectionError",
    "InMemoryAuditStorage",
    "JsonLinesAuditStorage",
    "StorageError",
]
