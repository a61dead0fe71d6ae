"""Currency statistics and reference lists."""

from vehicle_ledger.finance.currency import (
    EXCHANGE_RATES,
    CostPerDistance,
    CurrencyBreakdown,
    CurrencyStats,
    calculate_cost_per_distance,
    calculate_currency_stats,
    convert_currency,
    format_currency,
    get_currency_name,
)
from vehicle_ledger.finance.reference import CURRENCIES, CURRENCY_NAMES

__all__ = [
    "CURRENCIES",
    "CURRENCY_NAMES",
    "EXCHANGE_RATES",
    "CostPerDistance",
    "CurrencyBreakdown",
    "CurrencyStats",
    "calculate_cost_per_distance",
    "calculate_currency_stats",
    "convert_currency",
    "format_currency",
    "get_currency_name",
]
