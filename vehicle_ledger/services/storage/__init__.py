"""
Storage Services Package

Abstract audit storage interface plus in-memory and JSON-lines backends.
"""

from vehicle_ledger.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    StorageError,
)
from vehicle_ledger.services.storage.memory import InMemoryAuditStorage
from vehicle_ledger.services.storage.jsonl import JsonLinesAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "ConnectionError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "JsonLinesAuditStorage",
]
