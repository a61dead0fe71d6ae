"""Translation helpers."""

from vehicle_ledger.i18n.utils import (
    create_safe_translator,
    get_nested_translation,
    get_safe_translation,
    interpolate,
    pluralize,
)

__all__ = [
    "create_safe_translator",
    "get_nested_translation",
    "get_safe_translation",
    "interpolate",
    "pluralize",
]
