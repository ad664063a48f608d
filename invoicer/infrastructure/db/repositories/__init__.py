from .customer_repository import CustomerRepository
from .frequently_used_item_repository import FrequentlyUsedItemRepository
from .hsn_sac_repository import HsnSacRepository
from .invoice_repository import InvoiceRepository
from .user_repository import UserRepository

__all__ = [
    "UserRepository",
    "CustomerRepository",
    "InvoiceRepository",
    "HsnSacRepository",
    "FrequentlyUsedItemRepository",
]
