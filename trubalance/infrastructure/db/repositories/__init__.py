from .invoice_counter_repository import InvoiceCounterRepository

__all__ = [
    "InvoiceCounterRepository",
]
