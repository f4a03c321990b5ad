import logging

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from .config import settings
from .db import engine
from .routes import api_router
from .services.cache import PageCache
from .services.navigation import RedirectRequested

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)
logger.info("Database engine created: dialect=%s", engine.dialect.name)

app = FastAPI(title="invoice_dashboard", debug=settings.debug)
app.state.page_cache = PageCache(
    ttl_seconds=settings.page_cache_ttl_seconds,
    max_entries=settings.page_cache_max_entries,
)

app.include_router(api_router)


@app.exception_handler(RedirectRequested)
async def redirect_requested(
    request: Request, exc: RedirectRequested
) -> RedirectResponse:
    return RedirectResponse(url=exc.url, status_code=303)


@app.get("/health", tags=["health"])
def health_check() -> dict:
    return {"status": "ok"}


@app.get("/")
def index() -> RedirectResponse:
    return RedirectResponse(url="/dashboard", status_code=302)
