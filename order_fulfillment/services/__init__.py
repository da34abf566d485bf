"""
Order Fulfillment Services
"""

from .workflow import validate_order_workflow, OrderWorkflow
from .order_service import OrderService
from .fulfillment_service import FulfillmentService
from .unshipped_service import UnshippedItemService

__all__ = [
    # Workflow validators
    'validate_order_workflow', 'OrderWorkflow',

    # Services
    'OrderService', 'FulfillmentService', 'UnshippedItemService',
]
