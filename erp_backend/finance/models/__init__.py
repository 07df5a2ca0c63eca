from .account import Account
from .invoice import Invoice
from .payment import Payment

__all__ = ["Account", "Invoice", "Payment"]
