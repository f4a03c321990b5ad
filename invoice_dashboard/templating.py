from pathlib import Path

from fastapi.templating import Jinja2Templates

from .formatting import format_currency, format_date_to_local

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["currency"] = format_currency
templates.env.filters["local_date"] = format_date_to_local
