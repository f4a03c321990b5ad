"""Create, update and delete invoices from submitted form data.

Every mutation follows the same sequence: validate the form, write a single
statement, then invalidate the cached invoices listing. Create and update
finish by redirecting to the listing; delete returns a message instead since
it is triggered from the listing itself.
"""
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy import delete, insert, update
from sqlalchemy.orm import Session

from ..models import Invoice
from ..models.base import today
from ..schemas import InvoiceForm, State, flatten_errors, read_form
from .cache import CacheInvalidator
from .navigation import Navigator

INVOICES_PATH = "/dashboard/invoices"

CREATE_INVALID = "Missing Fields. Failed to Create Invoice."
CREATE_FAILED = "DataBase Error: Failed to create new invoice."
UPDATE_INVALID = "Missing Fields. Failed to Edit Invoice."
UPDATE_FAILED = "DataBase Error: Failed to update invoice."
DELETED = "Deleted invoice."
DELETE_FAILED = "DataBase Error: Failed to delete invoice."

logger = logging.getLogger(__name__)


def validate_invoice_form(
    form: Mapping[str, Any],
) -> InvoiceForm | dict[str, list[str]]:
    try:
        return InvoiceForm.model_validate(read_form(form))
    except ValidationError as exc:
        return flatten_errors(exc)


def create_invoice(
    db: Session,
    form: Mapping[str, Any],
    invalidator: CacheInvalidator,
    navigator: Navigator,
) -> State:
    validated = validate_invoice_form(form)
    if not isinstance(validated, InvoiceForm):
        return State(errors=validated, message=CREATE_INVALID)

    try:
        db.execute(
            insert(Invoice).values(
                customer_id=validated.customer_id,
                amount=validated.amount_in_cents,
                status=validated.status,
                date=today(),
            )
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(
            "Invoice create failed for customer %s", validated.customer_id
        )
        return State(message=CREATE_FAILED)

    logger.info("Created invoice for customer %s", validated.customer_id)
    invalidator.invalidate(INVOICES_PATH)
    navigator.redirect(INVOICES_PATH)
    return State()


def update_invoice(
    db: Session,
    invoice_id: str,
    form: Mapping[str, Any],
    invalidator: CacheInvalidator,
    navigator: Navigator,
) -> State:
    validated = validate_invoice_form(form)
    if not isinstance(validated, InvoiceForm):
        return State(errors=validated, message=UPDATE_INVALID)

    try:
        db.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(
                customer_id=validated.customer_id,
                amount=validated.amount_in_cents,
                status=validated.status,
            )
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Invoice update failed for %s", invoice_id)
        return State(message=UPDATE_FAILED)

    logger.info("Updated invoice %s", invoice_id)
    invalidator.invalidate(INVOICES_PATH)
    navigator.redirect(INVOICES_PATH)
    return State()


def delete_invoice(
    db: Session, invoice_id: str, invalidator: CacheInvalidator
) -> State:
    try:
        result = db.execute(delete(Invoice).where(Invoice.id == invoice_id))
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Invoice delete failed for %s", invoice_id)
        return State(message=DELETE_FAILED)

    logger.info("Deleted invoice %s (%d row(s))", invoice_id, result.rowcount)
    invalidator.invalidate(INVOICES_PATH)
    return State(message=DELETED)
