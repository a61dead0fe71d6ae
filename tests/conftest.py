"""Shared fixtures."""

import pytest

from vehicle_ledger.audit import AuditLogger
from vehicle_ledger.config import get_settings
from vehicle_ledger.services.storage import InMemoryAuditStorage


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make every test read the environment again."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(storage=audit_storage)
