"""
JSON-lines Audit Storage

One audit event per line, appended to a local file. Appends are retried
with exponential backoff since the file may sit on a network mount.

Queries read the whole file and filter in Python; the audit file of a
personal tracker stays small.
"""

import threading
from pathlib import Path
from typing import Union
from uuid import UUID

import structlog
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from vehicle_ledger.models.audit import AuditEvent
from vehicle_ledger.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonLinesAuditStorage(AuditStorageInterface):
    """
    File-backed implementation of audit log storage.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._lock = threading.Lock()
        if self._path.exists() and not self._path.is_file():
            raise ConnectionError(f"Audit log path is not a file: {self._path}")

    @property
    def path(self) -> Path:
        return self._path

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write_line(self, line: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")

    def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event."""
        try:
            with self._lock:
                self._write_line(event.to_json_line())
            return True
        except OSError as e:
            raise StorageError(f"Failed to write audit event: {e}") from e

    def _read_events(self) -> list[AuditEvent]:
        if not self._path.exists():
            return []

        try:
            with self._lock:
                lines = self._path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise StorageError(f"Failed to read audit log: {e}") from e

        events = []
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                events.append(AuditEvent.model_validate_json(line))
            except ValidationError:
                logger.warning(
                    "audit_line_malformed",
                    path=str(self._path),
                    line=lineno,
                )
        return events

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """Get events by correlation ID."""
        events = [e for e in self._read_events() if e.correlation_id == correlation_id]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """Get events by entity."""
        events = [
            e for e in self._read_events()
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """Get recent events."""
        events = self._read_events()
        events.sort(key=lambda e: e.timestamp, reverse=True)
        return events[:limit]
