import math

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.orm import Session

from ..config import settings
from ..formatting import cents_to_dollars, format_currency
from ..models import Customer, Invoice, Revenue


def fetch_revenue(db: Session) -> list[Revenue]:
    return list(db.scalars(select(Revenue).order_by(Revenue.position)))


def fetch_latest_invoices(
    db: Session, limit: int | None = None
) -> list[tuple[Invoice, Customer]]:
    query = (
        select(Invoice, Customer)
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc())
        .limit(limit or settings.latest_invoices_limit)
    )
    return [tuple(row) for row in db.execute(query).all()]


def fetch_card_data(db: Session) -> dict[str, int | str]:
    invoice_count = db.scalar(select(func.count()).select_from(Invoice)) or 0
    customer_count = db.scalar(select(func.count()).select_from(Customer)) or 0
    paid, pending = db.execute(
        select(
            func.coalesce(
                func.sum(case((Invoice.status == "paid", Invoice.amount), else_=0)),
                0,
            ),
            func.coalesce(
                func.sum(case((Invoice.status == "pending", Invoice.amount), else_=0)),
                0,
            ),
        )
    ).one()
    return {
        "number_of_invoices": invoice_count,
        "number_of_customers": customer_count,
        "total_paid_invoices": format_currency(paid),
        "total_pending_invoices": format_currency(pending),
    }


def _search_filter(query: str):
    like = f"%{query}%"
    return or_(
        Customer.name.ilike(like),
        Customer.email.ilike(like),
        cast(Invoice.amount, String).ilike(like),
        cast(Invoice.date, String).ilike(like),
        Invoice.status.ilike(like),
    )


def fetch_filtered_invoices(
    db: Session, query: str = "", page: int = 1
) -> list[tuple[Invoice, Customer]]:
    per_page = settings.invoices_per_page
    statement = (
        select(Invoice, Customer)
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(per_page)
        .offset((max(page, 1) - 1) * per_page)
    )
    if query:
        statement = statement.where(_search_filter(query))
    return [tuple(row) for row in db.execute(statement).all()]


def fetch_invoices_pages(db: Session, query: str = "") -> int:
    statement = (
        select(func.count())
        .select_from(Invoice)
        .join(Customer, Invoice.customer_id == Customer.id)
    )
    if query:
        statement = statement.where(_search_filter(query))
    total = db.scalar(statement) or 0
    return math.ceil(total / settings.invoices_per_page)


def fetch_invoice_by_id(db: Session, invoice_id: str) -> dict[str, object] | None:
    invoice = db.get(Invoice, invoice_id)
    if not invoice:
        return None
    return {
        "id": invoice.id,
        "customer_id": invoice.customer_id,
        "amount": cents_to_dollars(invoice.amount),
        "status": invoice.status,
    }


def fetch_customers(db: Session) -> list[Customer]:
    return list(db.scalars(select(Customer).order_by(Customer.name)))
