"""
Entry Models for Vehicle Ledger

Request payloads for fuel, expense and income entries and for user-defined
categories. Field names follow the client payloads (camelCase aliases);
Python code uses the snake_case attribute names.

Amounts are Decimal. Free fuel (zero cost) is allowed; a fill-up with no
volume is not.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
)


_ENTRY_CONFIG = ConfigDict(
    str_strip_whitespace=True,
    populate_by_name=True,
    extra="ignore",
)


CurrencyCode = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_upper=True, min_length=3, max_length=3),
]


# =============================================================================
# FINANCIAL ENTRIES
# =============================================================================

class FinancialEntry(BaseModel):
    """
    Shared shape of expense and income entries.

    Every entry belongs to a user and to one of that user's vehicles.
    """
    model_config = _ENTRY_CONFIG

    user_id: str = Field(..., min_length=1, alias="userId")
    car_id: str = Field(..., min_length=1, alias="carId")
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category name (predefined or user-defined)"
    )
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    currency: CurrencyCode = Field(
        default="HKD",
        description="ISO 4217 currency code"
    )
    entry_date: date = Field(..., alias="date")
    notes: str = Field(default="", max_length=1000)
    images: list[str] = Field(default_factory=list)


class ExpenseEntry(FinancialEntry):
    """A vehicle expense (service, tax, insurance, ...)."""


class IncomeEntry(FinancialEntry):
    """Income earned with a vehicle (ride sharing, rental, ...)."""


# =============================================================================
# FUEL ENTRIES
# =============================================================================

class FuelEntry(BaseModel):
    """A single fill-up."""
    model_config = _ENTRY_CONFIG

    user_id: str = Field(..., min_length=1, alias="userId")
    car_id: str = Field(..., min_length=1, alias="carId")
    fuel_company: str = Field(..., min_length=1, alias="fuelCompany")
    fuel_type: str = Field(..., min_length=1, alias="fuelType")

    mileage: Decimal = Field(
        ...,
        ge=0,
        description="Odometer reading at the fill-up"
    )
    distance_unit: str = Field(..., min_length=1, alias="distanceUnit")
    volume: Decimal = Field(
        ...,
        gt=0,
        description="Fuel volume, decimals allowed"
    )
    volume_unit: str = Field(..., min_length=1, alias="volumeUnit")
    cost: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Total cost (zero for free fuel)"
    )
    currency: CurrencyCode

    entry_date: date = Field(..., alias="date")
    entry_time: time = Field(
        default_factory=lambda: datetime.now().time().replace(second=0, microsecond=0),
        alias="time",
        description="HH:MM"
    )

    location: str = ""
    partial_fuel_up: bool = Field(default=False, alias="partialFuelUp")
    payment_type: str = Field(..., min_length=1, alias="paymentType")
    tyre_pressure: Optional[Decimal] = Field(default=None, ge=0, alias="tyrePressure")
    tyre_pressure_unit: Optional[str] = Field(default=None, alias="tyrePressureUnit")
    tags: list[str] = Field(default_factory=list)
    notes: str = Field(default="", max_length=1000)
    images: list[str] = Field(default_factory=list)


# =============================================================================
# CATEGORIES
# =============================================================================

class Category(BaseModel):
    """A user-defined (or predefined) expense or income category."""
    model_config = _ENTRY_CONFIG

    user_id: str = Field(..., min_length=1, alias="userId")
    name: str = Field(..., min_length=1, max_length=100)
    kind: Literal["expense", "income"] = "expense"
    is_predefined: bool = Field(default=False, alias="isPredefined")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage entry validation.

    Stage 1: Schema validation (types, required fields)
    Stage 2: Semantic validation (dates, amounts, reference lists)
    """

    entry_type: str
    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )

    schema_valid: bool
    semantic_valid: bool
    is_valid: bool

    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    # The parsed entry when schema validation passed
    entry: Optional[BaseModel] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
