from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_navigator, get_page_cache
from ..formatting import generate_pagination
from ..schemas import FORM_FIELDS, State
from ..services import dashboard as dashboard_service
from ..services import invoices as invoices_service
from ..services.cache import PageCache
from ..services.navigation import Navigator
from ..templating import templates

router = APIRouter()


@router.get("/dashboard/invoices", response_class=HTMLResponse)
def invoices_list(
    request: Request,
    query: str = "",
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
) -> HTMLResponse:
    query = query.strip()
    path = request.url.path
    variant = _list_variant(query, page)
    cached = cache.get(path, variant)
    if cached is not None:
        return HTMLResponse(cached)

    generation = cache.generation(path)
    response = _render_list(request, db, query, page, State())
    cache.put(path, variant, response.body.decode(), generation)
    return response


@router.get("/dashboard/invoices/create", response_class=HTMLResponse)
def invoices_create_form(
    request: Request, db: Session = Depends(get_db)
) -> HTMLResponse:
    return _render_form(request, db, None, _empty_form(), State())


@router.post("/dashboard/invoices/create", response_class=HTMLResponse)
async def invoices_create(
    request: Request,
    db: Session = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
    navigator: Navigator = Depends(get_navigator),
) -> HTMLResponse:
    form = await request.form()
    state = invoices_service.create_invoice(db, form, cache, navigator)
    return _render_form(request, db, None, _submitted_form(form), state)


@router.get("/dashboard/invoices/{invoice_id}/edit", response_class=HTMLResponse)
def invoices_edit_form(
    invoice_id: str, request: Request, db: Session = Depends(get_db)
) -> HTMLResponse:
    invoice = dashboard_service.fetch_invoice_by_id(db, invoice_id)
    if not invoice:
        return templates.TemplateResponse(
            request,
            "invoices/not_found.html",
            {"request": request, "invoice_id": invoice_id},
            status_code=404,
        )
    form = {
        "customerId": invoice["customer_id"],
        "amount": str(invoice["amount"]),
        "status": invoice["status"],
    }
    return _render_form(request, db, invoice_id, form, State())


@router.post("/dashboard/invoices/{invoice_id}/edit", response_class=HTMLResponse)
async def invoices_update(
    invoice_id: str,
    request: Request,
    db: Session = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
    navigator: Navigator = Depends(get_navigator),
) -> HTMLResponse:
    form = await request.form()
    state = invoices_service.update_invoice(db, invoice_id, form, cache, navigator)
    return _render_form(request, db, invoice_id, _submitted_form(form), state)


@router.post("/dashboard/invoices/{invoice_id}/delete", response_class=HTMLResponse)
async def invoices_delete(
    invoice_id: str,
    request: Request,
    db: Session = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
) -> HTMLResponse:
    form = await request.form()
    query = str(form.get("query", "")).strip()
    page = _parse_int(str(form.get("page", "")).strip()) or 1
    state = invoices_service.delete_invoice(db, invoice_id, cache)
    return _render_list(request, db, query, max(page, 1), state)


def _render_list(
    request: Request, db: Session, query: str, page: int, state: State
) -> HTMLResponse:
    total_pages = dashboard_service.fetch_invoices_pages(db, query)
    return templates.TemplateResponse(
        request,
        "invoices/list.html",
        {
            "request": request,
            "rows": dashboard_service.fetch_filtered_invoices(db, query, page),
            "query": query,
            "page": page,
            "total_pages": total_pages,
            "pagination": generate_pagination(page, total_pages),
            "state": state,
        },
    )


def _render_form(
    request: Request,
    db: Session,
    invoice_id: str | None,
    form: dict[str, str],
    state: State,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "invoices/form.html",
        {
            "request": request,
            "invoice_id": invoice_id,
            "customers": dashboard_service.fetch_customers(db),
            "form": form,
            "state": state,
        },
        status_code=400 if state.errors else 200,
    )


def _empty_form() -> dict[str, str]:
    return {field: "" for field in FORM_FIELDS}


def _submitted_form(form) -> dict[str, str]:
    return {field: str(form.get(field, "")).strip() for field in FORM_FIELDS}


def _list_variant(query: str, page: int) -> str:
    return f"query={query}&page={page}"


def _parse_int(value: str) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None
