"""
Order Fulfillment Models
"""

from .order import Order, OrderStatus, OrderPriority
from .order_item import OrderItem
from .unshipped_item import UnshippedItem
from .changelog import OrderChangelog, ChangelogAction, ImmutableChangelogError

__all__ = [
    # Order models
    'Order', 'OrderStatus', 'OrderPriority',
    'OrderItem',

    # Shortfalls
    'UnshippedItem',

    # Audit
    'OrderChangelog', 'ChangelogAction', 'ImmutableChangelogError',
]
