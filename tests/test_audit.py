"""
Tests for audit models, storage backends and the audit logger.

No test touches anything outside tmp_path.
"""

import json
import pytest
from datetime import timedelta
from uuid import uuid4

from vehicle_ledger.audit import AuditLogger, configure_logging, create_correlation_id
from vehicle_ledger.config import AppSettings, AuditSettings
from vehicle_ledger.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    ValidationIssue,
    ValidationResult,
)
from vehicle_ledger.services.storage import (
    AuditStorageInterface,
    ConnectionError,
    InMemoryAuditStorage,
    JsonLinesAuditStorage,
    StorageError,
)


class FailingStorage(InMemoryAuditStorage):
    def append_event(self, event):
        raise StorageError("disk full")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.VEHICLES_VALIDATED,
            description="Validated 2 vehicles",
        )
        assert event.event_type == AuditEventType.VEHICLES_VALIDATED
        assert event.severity == AuditSeverity.INFO
        assert event.entity_id is None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        correlation_id = uuid4()
        event = AuditEvent(
            event_type=AuditEventType.DUPLICATE_RECORDS_DROPPED,
            description="Dropped 1 duplicate",
            correlation_id=correlation_id,
            details={"dropped_ids": ["a"]},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "duplicate_records_dropped"
        assert log_dict["correlation_id"] == str(correlation_id)
        assert log_dict["details"]["dropped_ids"] == ["a"]

    def test_audit_event_json_line(self):
        event = AuditEventBuilder.vehicle_id_synthesized("temp-1-abc")
        line = event.to_json_line()
        assert "\n" not in line
        assert json.loads(line)["entity_id"] == "temp-1-abc"
        assert AuditEvent.model_validate_json(line) == event

    def test_builder_vehicle_name_defaulted(self):
        """Test AuditEventBuilder.vehicle_name_defaulted."""
        correlation_id = uuid4()
        event = AuditEventBuilder.vehicle_name_defaulted(
            vehicle_id="car1",
            name="Vehicle car1",
            original_name=None,
            correlation_id=correlation_id,
        )
        assert event.event_type == AuditEventType.VEHICLE_NAME_DEFAULTED
        assert event.severity == AuditSeverity.WARNING
        assert event.entity_id == "car1"
        assert event.details["original_name"] == "None"
        assert event.correlation_id == correlation_id

    def test_builder_vehicles_validated(self):
        event = AuditEventBuilder.vehicles_validated(received=3, returned=2)
        assert event.details["dropped"] == 1


class TestInMemoryStorage:
    """Tests for InMemoryAuditStorage."""

    def test_queries(self):
        storage = InMemoryAuditStorage()
        correlation_id = uuid4()
        first = AuditEventBuilder.vehicle_id_synthesized("temp-1-a", correlation_id)
        second = AuditEventBuilder.vehicle_name_defaulted("temp-1-a", "Vehicle temp-1-a", None, correlation_id)
        other = AuditEventBuilder.vehicles_validated(1, 1).model_copy(
            update={"timestamp": second.timestamp + timedelta(seconds=1)}
        )
        for event in (first, second, other):
            assert storage.append_event(event)

        assert len(storage) == 3
        assert storage.get_events_by_correlation_id(correlation_id) == [first, second]
        assert storage.get_events_by_entity("vehicle", "temp-1-a") == [first, second]
        assert storage.get_recent_events(limit=1) == [other]

    def test_is_an_audit_storage(self):
        assert isinstance(InMemoryAuditStorage(), AuditStorageInterface)


class TestJsonLinesStorage:
    """Tests for JsonLinesAuditStorage."""

    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / "audit" / "events.jsonl"
        storage = JsonLinesAuditStorage(path)
        correlation_id = uuid4()
        event = AuditEventBuilder.vehicle_id_synthesized("temp-9-z", correlation_id)

        assert storage.append_event(event)

        assert path.exists()
        assert storage.get_events_by_correlation_id(correlation_id) == [event]
        assert storage.get_events_by_entity("vehicle", "temp-9-z") == [event]

    def test_missing_file_is_empty(self, tmp_path):
        storage = JsonLinesAuditStorage(tmp_path / "none.jsonl")
        assert storage.get_recent_events() == []

    def test_malformed_lines_skipped(self, tmp_path):
        path = tmp_path / "events.jsonl"
        event = AuditEventBuilder.vehicles_validated(2, 2)
        path.write_text("not json\n\n" + event.to_json_line() + "\n", encoding="utf-8")

        assert JsonLinesAuditStorage(path).get_recent_events() == [event]

    def test_directory_path_rejected(self, tmp_path):
        with pytest.raises(ConnectionError):
            JsonLinesAuditStorage(tmp_path)


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_log_persists(self, audit_logger, audit_storage):
        assert audit_logger.log(AuditEventBuilder.vehicles_validated(1, 1))
        assert len(audit_storage) == 1

    def test_without_storage(self):
        logger = AuditLogger()
        assert logger.log(AuditEventBuilder.vehicles_validated(1, 1))
        assert logger.recent_events() == []

    def test_disabled(self, audit_storage):
        logger = AuditLogger(storage=audit_storage, enabled=False)
        assert logger.log(AuditEventBuilder.vehicles_validated(1, 1))
        assert len(audit_storage) == 0

    def test_storage_failure_does_not_raise(self):
        logger = AuditLogger(storage=FailingStorage())
        assert logger.log(AuditEventBuilder.vehicles_validated(1, 1)) is False

    def test_recent_events_capped(self, audit_storage):
        logger = AuditLogger(storage=audit_storage, max_recent_events=2)
        for _ in range(5):
            logger.log_vehicles_validated(1, 1)
        assert len(logger.recent_events()) == 2
        assert len(logger.recent_events(limit=50)) == 2

    def test_entry_validation_events(self, audit_logger, audit_storage):
        failed = ValidationResult(
            entry_type="fuel_entry",
            schema_valid=False,
            semantic_valid=False,
            is_valid=False,
            issues=[ValidationIssue(field="cost", issue_type="missing", message="required", severity="error")],
        )
        audit_logger.log_entry_validation(failed)

        [event] = audit_storage.get_recent_events()
        assert event.event_type == AuditEventType.ENTRY_VALIDATION_FAILED
        assert event.details["issues"][0]["field"] == "cost"

    def test_from_settings_in_memory(self):
        logger = AuditLogger.from_settings(AuditSettings())
        assert isinstance(logger.storage, InMemoryAuditStorage)

    def test_from_settings_file(self, tmp_path):
        logger = AuditLogger.from_settings(AuditSettings(log_path=str(tmp_path / "a.jsonl")))
        assert isinstance(logger.storage, JsonLinesAuditStorage)

    def test_correlation_ids_unique(self):
        assert create_correlation_id() != create_correlation_id()

    def test_configure_logging(self):
        configure_logging(AppSettings(log_level="info", log_format="json"))
        assert AuditLogger().log(AuditEventBuilder.vehicles_validated(1, 1))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
