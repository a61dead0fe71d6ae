"""Identifier extraction, normalization and collection helpers."""

from vehicle_ledger.ids.extract import (
    NULL_ID,
    get_object_id,
    get_user_id,
    has_same_id,
)
from vehicle_ledger.ids.normalize import normalize_id, normalize_ids
from vehicle_ledger.ids.lookup import (
    create_id_map,
    find_by_id,
    find_car_by_id,
    get_car_name_by_id,
    remove_duplicate_ids,
)

__all__ = [
    "NULL_ID",
    "create_id_map",
    "find_by_id",
    "find_car_by_id",
    "get_car_name_by_id",
    "get_object_id",
    "get_user_id",
    "has_same_id",
    "normalize_id",
    "normalize_ids",
    "remove_duplicate_ids",
]
