from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..formatting import generate_y_axis
from ..services import dashboard as dashboard_service
from ..templating import templates

router = APIRouter()


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard_overview(request: Request, db: Session = Depends(get_db)) -> HTMLResponse:
    revenue = dashboard_service.fetch_revenue(db)
    y_axis_labels, top_label = generate_y_axis(revenue)
    return templates.TemplateResponse(
        request,
        "dashboard/overview.html",
        {
            "request": request,
            "cards": dashboard_service.fetch_card_data(db),
            "revenue": revenue,
            "y_axis_labels": y_axis_labels,
            "top_label": top_label,
            "latest_invoices": dashboard_service.fetch_latest_invoices(db),
        },
    )
