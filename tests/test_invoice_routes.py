from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from invoice_dashboard.models import Invoice
from invoice_dashboard.services import dashboard as dashboard_service
from invoice_dashboard.services.invoices import delete_invoice


def test_create_redirects_to_listing(client, db_session, customers, page_cache):
    client.get("/dashboard/invoices")
    assert len(page_cache) == 1

    response = client.post(
        "/dashboard/invoices/create",
        data={"customerId": "cust-evil", "amount": "49.99", "status": "pending"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard/invoices"
    assert len(page_cache) == 0
    invoice = db_session.scalars(select(Invoice)).one()
    assert invoice.amount == 4999


def test_create_shows_field_errors(client, db_session, customers):
    response = client.post(
        "/dashboard/invoices/create",
        data={"customerId": "", "amount": "10", "status": "pending"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert "Please select a customer." in response.text
    assert "Missing Fields. Failed to Create Invoice." in response.text
    assert db_session.scalars(select(Invoice)).first() is None


def test_edit_form_not_found(client, customers):
    response = client.get("/dashboard/invoices/missing/edit")

    assert response.status_code == 404


def test_edit_form_prefills_amount_in_dollars(client, invoices):
    response = client.get("/dashboard/invoices/inv-1/edit")

    assert response.status_code == 200
    assert 'value="157.95"' in response.text


def test_update_redirects_to_listing(client, db_session, invoices):
    response = client.post(
        "/dashboard/invoices/inv-3/edit",
        data={"customerId": "cust-evil", "amount": "12", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard/invoices"
    invoice = db_session.get(Invoice, "inv-3")
    db_session.refresh(invoice)
    assert invoice.customer_id == "cust-evil"
    assert invoice.amount == 1200
    assert invoice.status == "paid"


def test_update_shows_field_errors(client, invoices):
    response = client.post(
        "/dashboard/invoices/inv-3/edit",
        data={"customerId": "cust-evil", "amount": "-1", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert "Please enter an amount greater than $0." in response.text
    assert "Missing Fields. Failed to Edit Invoice." in response.text


def test_delete_renders_listing_with_message(client, db_session, invoices):
    response = client.post("/dashboard/invoices/inv-1/delete", follow_redirects=False)

    assert response.status_code == 200
    assert "Deleted invoice." in response.text
    assert "$157.95" not in response.text
    assert db_session.get(Invoice, "inv-1") is None


def test_listing_is_cached_until_invalidated(client, db_session, invoices, page_cache):
    first = client.get("/dashboard/invoices")
    assert "$157.95" in first.text

    db_session.get(Invoice, "inv-1").amount = 12345
    db_session.commit()

    stale = client.get("/dashboard/invoices")
    assert "$157.95" in stale.text
    assert "$123.45" not in stale.text

    client.post("/dashboard/invoices/inv-3/delete")
    fresh = client.get("/dashboard/invoices")
    assert "$123.45" in fresh.text


def test_listing_search_filters_rows(client, invoices):
    response = client.get("/dashboard/invoices", params={"query": "evil"})

    assert response.status_code == 200
    assert "Evil Rabbit" in response.text
    assert "Lee Robinson" not in response.text


def test_dashboard_overview(client, invoices, revenue):
    response = client.get("/dashboard")

    assert response.status_code == 200
    assert "$448.00" in response.text
    assert "$164.61" in response.text
    assert "$5K" in response.text


def test_index_redirects_to_dashboard(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/dashboard"


def test_listing_render_overlapping_delete_is_not_cached(
    client, SessionLocal, invoices, page_cache, monkeypatch
):
    fetch_rows = dashboard_service.fetch_filtered_invoices

    def fetch_then_delete(db, query="", page=1):
        rows = fetch_rows(db, query, page)
        with SessionLocal() as other:
            delete_invoice(other, "inv-1", page_cache)
        return rows

    monkeypatch.setattr(dashboard_service, "fetch_filtered_invoices", fetch_then_delete)
    client.get("/dashboard/invoices")
    monkeypatch.setattr(dashboard_service, "fetch_filtered_invoices", fetch_rows)

    response = client.get("/dashboard/invoices")

    assert "$157.95" not in response.text
    assert "$448.00" in response.text


def test_create_rejects_file_as_customer(client, db_session, customers):
    response = client.post(
        "/dashboard/invoices/create",
        data={"amount": "10", "status": "pending"},
        files={"customerId": ("c.txt", b"cust-evil", "text/plain")},
        follow_redirects=False,
    )

    assert response.status_code == 400
    assert "Please select a customer." in response.text
    assert db_session.scalars(select(Invoice)).first() is None


def test_listing_ignores_unused_parameters_for_cache_key(client, invoices, page_cache):
    client.get("/dashboard/invoices", params={"junk": "1"})
    client.get("/dashboard/invoices", params={"junk": "2", "query": " "})
    client.get("/dashboard/invoices")

    assert len(page_cache) == 1


def test_delete_keeps_search_and_page(client, db_session, invoices):
    response = client.post(
        "/dashboard/invoices/inv-3/delete",
        data={"query": "lee", "page": "1"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert "Deleted invoice." in response.text
    assert 'value="lee"' in response.text
    assert "Lee Robinson" in response.text
    assert "Evil Rabbit" not in response.text


def test_update_database_error_shows_banner(
    client, db_session, invoices, page_cache, monkeypatch
):
    client.get("/dashboard/invoices")
    assert len(page_cache) == 1

    def failing_commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", failing_commit)
    response = client.post(
        "/dashboard/invoices/inv-3/edit",
        data={"customerId": "cust-evil", "amount": "12", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert "DataBase Error: Failed to update invoice." in response.text
    assert len(page_cache) == 1
    invoice = db_session.get(Invoice, "inv-3")
    db_session.refresh(invoice)
    assert invoice.amount == 666
    assert invoice.customer_id == "cust-lee"
