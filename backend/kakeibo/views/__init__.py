from .api_views import transaction_collection, transaction_detail
from .dashboard_views import dashboard, transaction_list

__all__ = [
    "dashboard",
    "transaction_collection",
    "transaction_detail",
    "transaction_list",
]
