"""Vehicle, entry and form validation."""

from vehicle_ledger.validation.vehicle import (
    NameFallback,
    generate_temp_id,
    resolve_name_fallback,
    validate_vehicle,
    validate_vehicles,
)
from vehicle_ledger.validation.entries import EntryValidator
from vehicle_ledger.validation.helpers import (
    validate_decimal_volume,
    validate_email_string,
    validate_max_length,
    validate_max_value,
    validate_min_value,
    validate_password_string,
    validate_required,
    validate_zero_cost,
)

__all__ = [
    "EntryValidator",
    "NameFallback",
    "generate_temp_id",
    "resolve_name_fallback",
    "validate_decimal_volume",
    "validate_email_string",
    "validate_max_length",
    "validate_max_value",
    "validate_min_value",
    "validate_password_string",
    "validate_required",
    "validate_vehicle",
    "validate_vehicles",
    "validate_zero_cost",
]
