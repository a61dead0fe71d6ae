"""
Collection helpers keyed by canonical identifier.

Note the opposite duplicate conventions: `remove_duplicate_ids` keeps the
first record per identifier, `create_id_map` keeps the last.
"""

from collections.abc import Iterable, Sequence
from typing import Any, Optional, TypeVar
from uuid import UUID

from vehicle_ledger.audit import AuditLogger
from vehicle_ledger.models.identifier import (
    CLIENT_ID_FIELD,
    DB_ID_FIELD,
    as_mapping,
    stringify_id,
)
from vehicle_ledger.ids.extract import get_object_id


T = TypeVar("T")


def remove_duplicate_ids(
    records: Iterable[T],
    keep_first_unidentified: bool = True,
    entity_type: str = "record",
    audit_logger: Optional[AuditLogger] = None,
    correlation_id: Optional[UUID] = None,
) -> list[T]:
    """
    Stable de-duplication by canonical identifier.

    Records without an identifier all share the "" key, so only the first
    of them survives. Pass `keep_first_unidentified=False` to drop every
    unidentified record instead.
    """
    seen: set[str] = set()
    result: list[T] = []
    dropped: list[str] = []

    for record in records:
        record_id = get_object_id(record)
        if record_id == "" and not keep_first_unidentified:
            dropped.append(record_id)
            continue
        if record_id in seen:
            dropped.append(record_id)
            continue
        seen.add(record_id)
        result.append(record)

    if dropped and audit_logger is not None:
        audit_logger.log_duplicates_dropped(
            entity_type=entity_type,
            dropped_ids=dropped,
            correlation_id=correlation_id,
        )

    return result


def find_by_id(records: Optional[Iterable[T]], record_id: str) -> Optional[T]:
    """First record whose canonical identifier equals `record_id`."""
    if not records:
        return None
    for record in records:
        if get_object_id(record) == record_id:
            return record
    return None


def create_id_map(records: Iterable[T]) -> dict[str, T]:
    """Index records by canonical identifier. Later duplicates win."""
    id_map: dict[str, T] = {}
    for record in records:
        record_id = get_object_id(record)
        if record_id:
            id_map[record_id] = record
    return id_map


def _raw_id_string(value: Any) -> str:
    return "" if value is None else stringify_id(value)


def find_car_by_id(car_id: str, cars: Optional[Sequence[Any]]) -> Optional[Any]:
    """
    Find a vehicle whose `_id` or `id`, as a string, equals `car_id`.

    Matching compares the raw string forms of both fields rather than the
    canonical identifier, so a car can be found by either of them.
    """
    if not car_id or not cars or not isinstance(cars, Sequence):
        return None

    for car in cars:
        data = as_mapping(car)
        if data is None:
            continue
        db_id = _raw_id_string(data.get(DB_ID_FIELD))
        client_id = _raw_id_string(data.get(CLIENT_ID_FIELD))
        if (db_id and db_id == car_id) or (client_id and client_id == car_id):
            return car

    return None


def get_car_name_by_id(car_id: str, cars: Optional[Sequence[Any]]) -> str:
    """Display name of the vehicle with `car_id`, or "" if unavailable."""
    car = find_car_by_id(car_id, cars)
    if car is None:
        return ""
    name = as_mapping(car).get("name")
    return name if isinstance(name, str) else ""
