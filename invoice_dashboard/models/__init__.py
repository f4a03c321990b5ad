from .base import Base
from .customer import Customer
from .invoice import INVOICE_STATUSES, Invoice
from .revenue import Revenue

__all__ = [
    "Base",
    "Customer",
    "Invoice",
    "INVOICE_STATUSES",
    "Revenue",
]
