"""
Order Fulfillment Views
"""

from .order_views import OrderViewSet
from .unshipped_views import UnshippedItemViewSet

__all__ = [
    'OrderViewSet',
    'UnshippedItemViewSet',
]
