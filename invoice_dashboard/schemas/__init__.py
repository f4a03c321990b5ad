from .invoice import (
    FORM_FIELDS,
    InvoiceForm,
    State,
    flatten_errors,
    read_form,
    to_cents,
)

__all__ = [
    "FORM_FIELDS",
    "InvoiceForm",
    "State",
    "flatten_errors",
    "read_form",
    "to_cents",
]
