"""
Two-Stage Entry Validation

STAGE 1 - SCHEMA VALIDATION:
- Required fields, types, formats (pydantic)
- Negative amounts, zero fuel volume

STAGE 2 - SEMANTIC VALIDATION:
- Future dates
- Absurd amounts
- Unknown currency / distance unit / payment type

Stage 2 only runs when stage 1 passes. Stage 2 findings are warnings: the
entry can still be saved, but the client should show them.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ValidationError

from vehicle_ledger.audit import AuditLogger
from vehicle_ledger.config import AppSettings, get_settings
from vehicle_ledger.finance.reference import (
    CURRENCIES,
    DISTANCE_UNITS,
    PAYMENT_TYPES,
    TYRE_PRESSURE_UNITS,
    VOLUME_UNITS,
)
from vehicle_ledger.models.entries import (
    Category,
    ExpenseEntry,
    FuelEntry,
    IncomeEntry,
    ValidationIssue,
    ValidationResult,
)
from vehicle_ledger.models.identifier import as_mapping


def _issue_type(error_type: str) -> str:
    if error_type == "missing":
        return "missing"
    if error_type.startswith(("greater_than", "less_than")):
        return "invalid_value"
    return "invalid_format"


class EntryValidator:
    """
    Validates fuel, expense and income payloads and categories.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._settings = settings or get_settings().app
        self._audit_logger = audit_logger

    def _validate_schema(
        self,
        model: type[BaseModel],
        data: Any,
    ) -> tuple[Optional[BaseModel], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (parsed_entry or None, list_of_issues)
        """
        payload = as_mapping(data)
        if payload is None:
            return None, [ValidationIssue(
                field="entry",
                issue_type="invalid_format",
                message="Entry must be an object",
                severity="error",
            )]

        try:
            return model.model_validate(dict(payload)), []
        except ValidationError as e:
            issues = []
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "entry"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type=_issue_type(error["type"]),
                    message=error["msg"],
                    severity="error",
                ))
            return None, issues

    def _check_date(self, entry_date: date) -> list[ValidationIssue]:
        max_date = date.today() + timedelta(days=self._settings.future_date_tolerance_days)
        if entry_date > max_date:
            return [ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Entry date ({entry_date}) is in the future",
                severity="warning",
            )]
        return []

    def _check_amount(self, field: str, amount: Decimal) -> list[ValidationIssue]:
        max_amount = Decimal(str(self._settings.max_entry_amount))
        if amount > max_amount:
            return [ValidationIssue(
                field=field,
                issue_type="suspicious_value",
                message=f"Amount ({amount:,.2f}) seems unusually high",
                severity="warning",
            )]
        return []

    def _check_currency(self, currency: str) -> list[ValidationIssue]:
        if currency not in CURRENCIES:
            return [ValidationIssue(
                field="currency",
                issue_type="unknown_currency",
                message=f"Currency {currency} is not supported; totals will skip it",
                severity="warning",
            )]
        return []

    def _check_unit(self, field: str, unit: str, known: list[str]) -> list[ValidationIssue]:
        if unit not in known:
            return [ValidationIssue(
                field=field,
                issue_type="unknown_unit",
                message=f"Unit '{unit}' is not recognised",
                severity="warning",
            )]
        return []

    def _validate_semantic(self, entry: BaseModel) -> list[ValidationIssue]:
        """
        Stage 2: Semantic validation.

        All findings are warnings.
        """
        issues: list[ValidationIssue] = []

        if isinstance(entry, FuelEntry):
            issues.extend(self._check_date(entry.entry_date))
            issues.extend(self._check_amount("cost", entry.cost))
            issues.extend(self._check_currency(entry.currency))
            issues.extend(self._check_unit("distanceUnit", entry.distance_unit, DISTANCE_UNITS))
            issues.extend(self._check_unit("volumeUnit", entry.volume_unit, VOLUME_UNITS))
            if entry.tyre_pressure_unit:
                issues.extend(self._check_unit(
                    "tyrePressureUnit", entry.tyre_pressure_unit, TYRE_PRESSURE_UNITS
                ))
            if entry.payment_type not in PAYMENT_TYPES:
                issues.append(ValidationIssue(
                    field="paymentType",
                    issue_type="unknown_payment_type",
                    message=f"Payment type '{entry.payment_type}' is not recognised",
                    severity="warning",
                ))
        elif isinstance(entry, (ExpenseEntry, IncomeEntry)):
            issues.extend(self._check_date(entry.entry_date))
            issues.extend(self._check_amount("amount", entry.amount))
            issues.extend(self._check_currency(entry.currency))
            if entry.amount == 0:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="suspicious_value",
                    message="Amount is zero",
                    severity="warning",
                ))

        return issues

    def validate(
        self,
        model: type[BaseModel],
        data: Any,
        entry_type: str,
        correlation_id: Optional[UUID] = None,
    ) -> ValidationResult:
        """
        Run the two-stage validation pipeline against `model`.

        Args:
            model: Entry model to parse the payload into
            data: Raw payload (mapping or pydantic model)
            entry_type: Name recorded on the result and in the audit trail

        Returns:
            ValidationResult with all issues found
        """
        entry, issues = self._validate_schema(model, data)
        schema_valid = entry is not None

        if schema_valid:
            issues.extend(self._validate_semantic(entry))

        semantic_valid = schema_valid and not any(
            issue.severity == "error" for issue in issues
        )

        result = ValidationResult(
            entry_type=entry_type,
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=issues,
            warnings=[issue.message for issue in issues if issue.severity == "warning"],
            entry=entry,
        )

        if self._audit_logger is not None:
            self._audit_logger.log_entry_validation(result, correlation_id)

        return result

    def validate_fuel_entry(self, data: Any) -> ValidationResult:
        return self.validate(FuelEntry, data, "fuel_entry")

    def validate_expense_entry(self, data: Any) -> ValidationResult:
        return self.validate(ExpenseEntry, data, "expense_entry")

    def validate_income_entry(self, data: Any) -> ValidationResult:
        return self.validate(IncomeEntry, data, "income_entry")

    def validate_category(self, data: Any) -> ValidationResult:
        return self.validate(Category, data, "category")
