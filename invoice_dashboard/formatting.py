import math
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from .models import Revenue


def format_currency(cents: int | None) -> str:
    dollars = Decimal(cents or 0) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def cents_to_dollars(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def format_date_to_local(value: date) -> str:
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def generate_y_axis(revenue: Iterable[Revenue]) -> tuple[list[str], int]:
    """Chart labels from the top of the scale down to $0K, in $1K steps."""
    highest = max((row.revenue for row in revenue), default=0)
    top = math.ceil(highest / 1000) * 1000
    labels = [f"${value // 1000}K" for value in range(top, -1, -1000)]
    return labels, top


def generate_pagination(current_page: int, total_pages: int) -> list[int | str]:
    if total_pages <= 7:
        return list(range(1, total_pages + 1))
    if current_page <= 3:
        return [1, 2, 3, "...", total_pages - 1, total_pages]
    if current_page >= total_pages - 2:
        return [1, 2, "...", total_pages - 2, total_pages - 1, total_pages]
    return [
        1,
        "...",
        current_page - 1,
        current_page,
        current_page + 1,
        "...",
        total_pages,
    ]
