"""
Identifier Models

Records reach this package from two directions: documents loaded from the
database carry a database-style `_id` (often an opaque ObjectId), payloads
built by clients carry a plain `id`. Both conventions are modelled here.

An identifier value is one of:
- PlainString: a non-empty string
- PlainNumber: a non-zero, non-NaN number
- OpaqueRef: any other object (ObjectId, UUID, ...) rendered through str()

`True` is accepted and renders as "true". `None`, `False`, zero, the empty
string and containers are unusable and have no Identifier.
"""

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DB_ID_FIELD = "_id"
CLIENT_ID_FIELD = "id"

_CONTAINER_TYPES = (Mapping, list, tuple, set, frozenset)


class PlainString(BaseModel):
    """A non-empty string identifier."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    value: str = Field(..., min_length=1)

    def to_canonical_string(self) -> str:
        return self.value


class PlainNumber(BaseModel):
    """A numeric identifier. Integral floats render without a fraction."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: Union[int, float, Decimal]

    def to_canonical_string(self) -> str:
        return _format_number(self.value)


class OpaqueRef(BaseModel):
    """
    Wrapper around a database-generated identifier object.

    The wrapped value is never inspected; its string conversion is the
    identifier.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["opaque"] = "opaque"
    value: Any

    def to_canonical_string(self) -> str:
        return str(self.value)


Identifier = Union[PlainString, PlainNumber, OpaqueRef]


def _format_number(value: Union[int, float, Decimal]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_identifier(value: Any) -> Optional[Identifier]:
    """Classify a raw field value. Returns None for unusable values."""
    if value is None or isinstance(value, _CONTAINER_TYPES):
        return None
    if isinstance(value, bool):
        return PlainString(value="true") if value else None
    if isinstance(value, str):
        return PlainString(value=value) if value else None
    if isinstance(value, (int, float, Decimal)):
        if value == 0:
            return None
        if isinstance(value, float) and math.isnan(value):
            return None
        if isinstance(value, Decimal) and not value.is_finite():
            return None
        return PlainNumber(value=value)
    return OpaqueRef(value=value)


def is_usable_id(value: Any) -> bool:
    return to_identifier(value) is not None


def canonical_id(value: Any) -> str:
    """Canonical string of a single field value, or "" if unusable."""
    identifier = to_identifier(value)
    return identifier.to_canonical_string() if identifier else ""


def stringify_id(value: Any) -> str:
    """
    Plain string coercion used when one identifier field is derived from
    the other. Unlike canonical_id this keeps falsy values ("0", "false").
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return _format_number(value)
    return str(value)


def as_mapping(record: Any) -> Optional[Mapping]:
    """
    View a record as a mapping.

    Pydantic models are dumped by alias with their defaults. Identifier
    fields are the exception: an unset `_id` or `id` is left out, so a
    missing identifier stays missing. Anything else that is not a mapping
    yields None.
    """
    if isinstance(record, EntityRecord):
        return record.to_mapping()
    if isinstance(record, BaseModel):
        data = record.model_dump(by_alias=True)
        for name, field in type(record).model_fields.items():
            key = field.alias or name
            if key in (DB_ID_FIELD, CLIENT_ID_FIELD) and name not in record.model_fields_set:
                data.pop(key, None)
        return data
    if isinstance(record, Mapping):
        return record
    return None


class EntityRecord(BaseModel):
    """
    Typed view of a loosely-structured entity.

    The two identifier conventions are explicit optional fields; every
    other key is kept in the open extension map (`model_extra`).
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    db_id: Any = Field(default=None, alias=DB_ID_FIELD)
    client_id: Any = Field(default=None, alias=CLIENT_ID_FIELD)

    @classmethod
    def from_mapping(cls, data: Mapping) -> "EntityRecord":
        return cls.model_validate(dict(data))

    def to_mapping(self) -> dict[str, Any]:
        """Back to a plain record, keeping only identifier keys that were set."""
        data: dict[str, Any] = {}
        if "db_id" in self.model_fields_set:
            data[DB_ID_FIELD] = self.db_id
        if "client_id" in self.model_fields_set:
            data[CLIENT_ID_FIELD] = self.client_id
        data.update(self.model_extra or {})
        return data

    @property
    def identifier(self) -> str:
        """Canonical identifier of this record ("" if it has none)."""
        from vehicle_ledger.ids.extract import get_object_id

        return get_object_id(self.to_mapping())
