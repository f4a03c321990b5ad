from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from ..models import INVOICE_STATUSES

FORM_FIELDS = ("customerId", "amount", "status")


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """Fields submitted by the create and edit invoice forms."""

    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(alias="customerId")
    amount: Decimal
    status: Literal["pending", "paid"]

    @field_validator("customer_id", mode="before")
    @classmethod
    def require_customer(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("customer_id", "Please select a customer.")
        return value.strip()

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Decimal:
        # Missing or blank input counts as zero.
        raw = "" if value is None else str(value).strip()
        try:
            amount = Decimal(raw or "0")
            cents = to_cents(amount) if amount.is_finite() else 0
        except InvalidOperation:
            amount, cents = Decimal("0"), 0
        if cents < 1:
            raise PydanticCustomError(
                "amount", "Please enter an amount greater than $0."
            )
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def require_status(cls, value: Any) -> str:
        if value not in INVOICE_STATUSES:
            raise PydanticCustomError("status", "Please select an invoice status.")
        return value

    @property
    def amount_in_cents(self) -> int:
        return to_cents(self.amount)


class State(BaseModel):
    """Result handed back to a form when a mutation does not redirect."""

    errors: dict[str, list[str]] | None = None
    message: str | None = None


def read_form(form: Mapping[str, Any]) -> dict[str, Any]:
    return {field: form.get(field) for field in FORM_FIELDS}


def flatten_errors(exc: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "form"
        errors.setdefault(field, []).append(error["msg"])
    return errors
