"""
Currency statistics for the financial analysis page.

Entries are plain records (or entry models) carrying `cost` (fuel) or
`amount` (expense, income) plus a `currency` code. Values that do not
parse as numbers are skipped rather than failing the whole report.

Exchange rates are a static USD-based table.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, Field

from vehicle_ledger.config import get_settings
from vehicle_ledger.finance.reference import CURRENCIES, CURRENCY_NAMES
from vehicle_ledger.models.identifier import as_mapping


logger = structlog.get_logger(__name__)

Amount = Union[int, float, str, Decimal]

# Units of each currency per 1 USD
EXCHANGE_RATES: dict[str, Decimal] = {
    "USD": Decimal("1.0"),
    "EUR": Decimal("0.85"),
    "GBP": Decimal("0.73"),
    "JPY": Decimal("110.0"),
    "HKD": Decimal("7.75"),
    "CAD": Decimal("1.25"),
    "AUD": Decimal("1.35"),
    "CHF": Decimal("0.92"),
    "CNY": Decimal("6.45"),
    "SGD": Decimal("1.35"),
    "NZD": Decimal("1.40"),
    "INR": Decimal("74.0"),
    "KRW": Decimal("1100.0"),
    "MXN": Decimal("20.0"),
    "BRL": Decimal("5.2"),
    "ZAR": Decimal("14.5"),
    "RUB": Decimal("75.0"),
    "SEK": Decimal("8.5"),
    "NOK": Decimal("8.8"),
    "DKK": Decimal("6.3"),
}

KM_PER_MILE = Decimal("1.60934")

# Gaps above this between two fill-ups are treated as missing entries
MAX_DISTANCE_BETWEEN_FILLUPS_KM = Decimal("2000")


class CurrencyStats(BaseModel):
    """Totals for one currency."""

    currency: str
    total_fuel_cost: Decimal = Decimal("0")
    total_expense_cost: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    net_cost: Decimal = Decimal("0")
    entry_count: int = 0


class CurrencyBreakdown(BaseModel):
    """Per-currency totals plus a grand total in the base currency."""

    by_currency: list[CurrencyStats] = Field(default_factory=list)
    total_in_base_currency: Decimal = Decimal("0")
    base_currency: str


class CostPerDistance(BaseModel):
    """Fuel cost per kilometre for one currency."""

    total_cost: Decimal = Decimal("0")
    total_distance: Decimal = Decimal("0")
    cost_per_distance: Optional[Decimal] = None


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def convert_currency(amount: Amount, from_currency: str, to_currency: str) -> Decimal:
    """Convert through USD. Unknown currencies are treated as USD."""
    value = _to_decimal(amount)
    if value is None:
        raise ValueError(f"Not a number: {amount!r}")
    if from_currency == to_currency:
        return value

    from_rate = EXCHANGE_RATES.get(from_currency, Decimal("1.0"))
    to_rate = EXCHANGE_RATES.get(to_currency, Decimal("1.0"))
    return value / from_rate * to_rate


def _accumulate(
    stats: dict[str, CurrencyStats],
    entries: Iterable[Any],
    amount_field: str,
    total_field: str,
) -> None:
    for entry in entries:
        data = as_mapping(entry)
        if data is None:
            continue
        currency = data.get("currency")
        value = _to_decimal(data.get(amount_field))
        if value is None or currency not in stats:
            continue
        bucket = stats[currency]
        setattr(bucket, total_field, getattr(bucket, total_field) + value)
        bucket.entry_count += 1


def calculate_currency_stats(
    fuel_entries: Iterable[Any],
    expense_entries: Iterable[Any],
    income_entries: Iterable[Any],
    base_currency: Optional[str] = None,
) -> CurrencyBreakdown:
    """
    Group fuel costs, expenses and income by currency.

    Net cost is fuel + expenses - income. Currencies without entries are
    left out; the rest are sorted by absolute net cost, largest first.
    """
    base_currency = base_currency or get_settings().app.base_currency
    stats = {code: CurrencyStats(currency=code) for code in CURRENCIES}

    _accumulate(stats, fuel_entries, "cost", "total_fuel_cost")
    _accumulate(stats, expense_entries, "amount", "total_expense_cost")
    _accumulate(stats, income_entries, "amount", "total_income")

    by_currency = []
    total = Decimal("0")
    for code, bucket in stats.items():
        if bucket.entry_count == 0:
            continue
        bucket.net_cost = bucket.total_fuel_cost + bucket.total_expense_cost - bucket.total_income
        by_currency.append(bucket)
        total += convert_currency(bucket.net_cost, code, base_currency)

    by_currency.sort(key=lambda s: abs(s.net_cost), reverse=True)

    return CurrencyBreakdown(
        by_currency=by_currency,
        total_in_base_currency=total,
        base_currency=base_currency,
    )


def format_currency(amount: Amount, currency: str) -> str:
    """`<code> <amount>` with thousands separators and two decimals."""
    value = _to_decimal(amount)
    if value is None:
        logger.warning("currency_format_failed", amount=repr(amount), currency=currency)
        return f"{currency} {amount}"
    return f"{currency} {value:,.2f}"


def get_currency_name(code: str) -> str:
    return CURRENCY_NAMES.get(code, code)


def calculate_cost_per_distance(
    fuel_entries: Iterable[Any],
    currency: str,
) -> CostPerDistance:
    """
    Fuel cost per kilometre from consecutive fill-ups in one currency.

    Each fill-up pays for the distance driven since the previous one.
    Mileage in miles is converted to kilometres. Gaps that are not
    positive or exceed MAX_DISTANCE_BETWEEN_FILLUPS_KM are skipped.
    """
    relevant: list[Mapping] = []
    for entry in fuel_entries:
        data = as_mapping(entry)
        if data is not None and data.get("currency") == currency:
            relevant.append(data)

    if len(relevant) < 2:
        return CostPerDistance()

    relevant.sort(key=lambda e: str(e.get("date", "")))

    total_cost = Decimal("0")
    total_distance = Decimal("0")

    for prev, curr in zip(relevant, relevant[1:]):
        mileage = _to_decimal(curr.get("mileage"))
        prev_mileage = _to_decimal(prev.get("mileage"))
        cost = _to_decimal(curr.get("cost"))
        if mileage is None or prev_mileage is None or cost is None:
            continue

        distance = mileage - prev_mileage
        if curr.get("distanceUnit") != "km":
            distance *= KM_PER_MILE

        if distance <= 0 or distance > MAX_DISTANCE_BETWEEN_FILLUPS_KM:
            continue

        total_cost += cost
        total_distance += distance

    return CostPerDistance(
        total_cost=total_cost,
        total_distance=total_distance,
        cost_per_distance=total_cost / total_distance if total_distance > 0 else None,
    )
