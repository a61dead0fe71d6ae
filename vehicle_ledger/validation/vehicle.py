"""
Vehicle Validation

Vehicle lists feed dropdowns and history tables, where a blank entry is
worse than a placeholder. `validate_vehicle` therefore never rejects a
record: it guarantees both identifier fields and a non-empty name, filling
in what is missing.

The label used for a vehicle without a usable name is an explicit policy
(`NameFallback`), taken from the caller or from settings.
"""

import time
from collections.abc import Sequence
from enum import Enum
from typing import Any, Optional, Union
from uuid import UUID, uuid4

import structlog

from vehicle_ledger.audit import AuditLogger, create_correlation_id
from vehicle_ledger.config import IdentitySettings, get_settings
from vehicle_ledger.models.identifier import (
    CLIENT_ID_FIELD,
    DB_ID_FIELD,
    as_mapping,
    stringify_id,
)


logger = structlog.get_logger(__name__)

_TEMP_SUFFIX_LENGTH = 13


class NameFallback(str, Enum):
    """Label policy for vehicles without a usable name."""
    SHORT_ID = "short_id"   # "Vehicle <first characters of the id>"
    UNKNOWN = "unknown"     # the configured unknown-vehicle label


def generate_temp_id(prefix: Optional[str] = None) -> str:
    """Temporary identifier: `<prefix>-<epoch millis>-<13 alnum chars>`."""
    prefix = prefix or get_settings().identity.temp_id_prefix
    millis = int(time.time() * 1000)
    return f"{prefix}-{millis}-{uuid4().hex[:_TEMP_SUFFIX_LENGTH]}"


def resolve_name_fallback(
    name_fallback: Optional[Union[NameFallback, str]],
    identity: IdentitySettings,
) -> NameFallback:
    """
    The requested label policy, or the configured one when none is given.

    An unrecognised policy is logged and replaced by the configured one.
    """
    if not name_fallback:
        return NameFallback(identity.name_fallback)
    try:
        return NameFallback(name_fallback)
    except ValueError:
        logger.warning(
            "unknown_name_fallback",
            requested=str(name_fallback),
            using=identity.name_fallback,
        )
        return NameFallback(identity.name_fallback)


def _fallback_name(
    vehicle_id: Any,
    policy: NameFallback,
    identity: IdentitySettings,
) -> str:
    id_str = stringify_id(vehicle_id)
    if not id_str or policy is NameFallback.UNKNOWN:
        return identity.unknown_vehicle_label
    return f"Vehicle {id_str[:identity.short_id_length]}"


def validate_vehicle(
    vehicle: Any,
    name_fallback: Optional[Union[NameFallback, str]] = None,
    audit_logger: Optional[AuditLogger] = None,
    correlation_id: Optional[UUID] = None,
    identity: Optional[IdentitySettings] = None,
) -> Optional[dict[str, Any]]:
    """
    Return a copy of `vehicle` with usable `id`, `_id` and `name`.

    - no keys at all: temporary id, unknown-vehicle label
    - neither id field set: temporary id on both
    - only `_id` set: `id` is its string form
    - only `id` set: `_id` is the raw `id`
    - name missing, not a string, or blank: replaced per `name_fallback`

    A valid name is trimmed. Every other field passes through.
    Returns None for None and for values that are not records.

    `identity` defaults to the current settings; batch callers pass it in
    so the environment is read once per batch.
    """
    if vehicle is None:
        return None

    data = as_mapping(vehicle)
    if data is None:
        logger.debug("vehicle_not_a_record", value_type=type(vehicle).__name__)
        return None

    identity = identity or get_settings().identity
    policy = resolve_name_fallback(name_fallback, identity)

    if not data:
        temp_id = generate_temp_id(identity.temp_id_prefix)
        if audit_logger is not None:
            audit_logger.log_vehicle_id_synthesized(temp_id, correlation_id)
        return {
            CLIENT_ID_FIELD: temp_id,
            DB_ID_FIELD: temp_id,
            "name": identity.unknown_vehicle_label,
        }

    validated = dict(data)

    if not validated.get(CLIENT_ID_FIELD) and not validated.get(DB_ID_FIELD):
        temp_id = generate_temp_id(identity.temp_id_prefix)
        validated[CLIENT_ID_FIELD] = temp_id
        validated[DB_ID_FIELD] = temp_id
        if audit_logger is not None:
            audit_logger.log_vehicle_id_synthesized(temp_id, correlation_id)
    elif not validated.get(CLIENT_ID_FIELD):
        validated[CLIENT_ID_FIELD] = stringify_id(validated[DB_ID_FIELD])
    elif not validated.get(DB_ID_FIELD):
        validated[DB_ID_FIELD] = validated[CLIENT_ID_FIELD]

    name = validated.get("name")
    if isinstance(name, str) and name.strip():
        validated["name"] = name.strip()
    else:
        validated["name"] = _fallback_name(validated[CLIENT_ID_FIELD], policy, identity)
        if audit_logger is not None:
            audit_logger.log_vehicle_name_defaulted(
                vehicle_id=stringify_id(validated[CLIENT_ID_FIELD]),
                name=validated["name"],
                original_name=name,
                correlation_id=correlation_id,
            )

    return validated


def validate_vehicles(
    vehicles: Any,
    name_fallback: Optional[Union[NameFallback, str]] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> list[dict[str, Any]]:
    """
    Validate every vehicle of a list.

    Returns [] for anything that is not a list. None entries are dropped;
    every record that is present comes back validated.
    """
    if isinstance(vehicles, (str, bytes)) or not isinstance(vehicles, Sequence):
        return []

    logger.info("validating_vehicles", count=len(vehicles))

    identity = get_settings().identity
    policy = resolve_name_fallback(name_fallback, identity)

    correlation_id = create_correlation_id() if audit_logger is not None else None
    validated = []
    for vehicle in vehicles:
        result = validate_vehicle(
            vehicle,
            name_fallback=policy,
            audit_logger=audit_logger,
            correlation_id=correlation_id,
            identity=identity,
        )
        if result is not None:
            validated.append(result)

    if audit_logger is not None:
        audit_logger.log_vehicles_validated(
            received=len(vehicles),
            returned=len(validated),
            correlation_id=correlation_id,
        )

    return validated
