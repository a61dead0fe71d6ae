"""
Identifier extraction.

`get_object_id` resolves the canonical identifier of a record. The
database-style `_id` key wins over the client-style `id` key whenever it is
present, even when its value is unusable; the single exception is a null
`_id` next to a usable `id`.

Boolean identifiers follow one fixed rule: `True` is "true", `False` is
unusable. No state is carried between calls.
"""

from typing import Any

from vehicle_ledger.models.identifier import (
    CLIENT_ID_FIELD,
    DB_ID_FIELD,
    as_mapping,
    canonical_id,
    is_usable_id,
)


# A key that is present but holds null resolves to the literal "null",
# the same string a JSON client would produce for it.
NULL_ID = "null"

_PLAIN_ID_TYPES = (str, int, float)


def get_object_id(record: Any) -> str:
    """
    Canonical string identifier of a record.

    Returns "" for non-records and for records without a usable identifier.
    Never raises.
    """
    data = as_mapping(record)
    if data is None:
        return ""

    if DB_ID_FIELD in data:
        db_value = data[DB_ID_FIELD]
        if db_value is None:
            if CLIENT_ID_FIELD in data:
                client_value = data[CLIENT_ID_FIELD]
                if is_usable_id(client_value):
                    return canonical_id(client_value)
                if client_value is None:
                    return ""
            return NULL_ID
        return canonical_id(db_value)

    if CLIENT_ID_FIELD in data:
        client_value = data[CLIENT_ID_FIELD]
        if client_value is None:
            return NULL_ID
        return canonical_id(client_value)

    return ""


def get_user_id(user: Any) -> str:
    """
    Identifier of a user record.

    Session payloads carry the client-style `id`, so here it wins over
    `_id` when it is a usable string or number.
    """
    data = as_mapping(user)
    if not data:
        return ""

    client_value = data.get(CLIENT_ID_FIELD)
    if (
        isinstance(client_value, _PLAIN_ID_TYPES)
        and not isinstance(client_value, bool)
        and is_usable_id(client_value)
    ):
        return canonical_id(client_value)

    db_value = data.get(DB_ID_FIELD)
    if isinstance(db_value, bool):
        return ""
    return canonical_id(db_value)


def has_same_id(first: Any, second: Any) -> bool:
    """True if both records have a canonical identifier and they match."""
    first_id = get_object_id(first)
    second_id = get_object_id(second)
    return first_id != "" and second_id != "" and first_id == second_id
