"""Record normalization: make both identifier fields available."""

from collections.abc import Sequence
from typing import Any, Optional

from vehicle_ledger.models.identifier import (
    CLIENT_ID_FIELD,
    DB_ID_FIELD,
    as_mapping,
    is_usable_id,
    stringify_id,
)


def normalize_id(record: Any) -> Any:
    """
    Return a shallow copy of `record` exposing both `_id` and `id`.

    - `_id` usable, `id` falsy: `id` becomes the string form of `_id`
    - `id` set, `_id` falsy: `_id` becomes the raw `id`
    - both present: left untouched

    Applying it twice gives the same record as applying it once.
    None passes through, as does anything that is not a record.
    The input is never mutated.
    """
    if record is None:
        return None

    data = as_mapping(record)
    if data is None:
        return record

    normalized = dict(data)

    if is_usable_id(normalized.get(DB_ID_FIELD)) and not normalized.get(CLIENT_ID_FIELD):
        normalized[CLIENT_ID_FIELD] = stringify_id(normalized[DB_ID_FIELD])

    if normalized.get(CLIENT_ID_FIELD) is not None and not normalized.get(DB_ID_FIELD):
        normalized[DB_ID_FIELD] = normalized[CLIENT_ID_FIELD]

    return normalized


def normalize_ids(records: Any) -> Optional[Any]:
    """Apply `normalize_id` to every element of a list of records."""
    if records is None:
        return None
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        return records
    return [normalize_id(record) for record in records]
