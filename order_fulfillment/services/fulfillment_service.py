"""
Fulfillment Service for Order Fulfillment.

Drives order status transitions: pick-list completion, shipping (with the
partial-fulfillment approval gate) and cancellation.
"""

import logging
from typing import List, Dict, Any, Optional
from django.db import transaction
from django.utils import timezone

from products.services import StockService
from ..models import (
    Order, OrderItem, OrderStatus, UnshippedItem, OrderChangelog, ChangelogAction
)
from ..exceptions import (
    ValidationException, ApprovalRequiredException, PartialApprovalForbiddenException
)
from .order_service import OrderService
from .workflow import validate_order_workflow

logger = logging.getLogger(__name__)


class FulfillmentService:
    """Service class for order status transitions."""

    @staticmethod
    def update_status(order_id, new_status: str, updated_by,
                      item_quantities: Optional[List[Dict[str, Any]]] = None,
                      approve_partial_fulfillment: bool = False) -> Order:
        """
        Move an order to a new status.

        Args:
            order_id: Order primary key
            new_status: Target status
            updated_by: User requesting the change
            item_quantities: For ``picked``, per item
                {"order_item_id", "product_id", "requested_quantity", "actual_quantity"}
            approve_partial_fulfillment: For ``shipped``, explicit approval to
                ship while unshipped items exist

        Returns:
            Updated Order instance

        Raises:
            InvalidTransitionException: If the transition is not allowed
            ApprovalRequiredException: If shipping needs partial-fulfillment approval
            ValidationException: If item quantities are invalid
        """
        if new_status not in OrderStatus.values:
            raise ValidationException(f"Invalid status value: {new_status}", {"status": new_status})

        with transaction.atomic():
            order = OrderService.get_order(order_id, for_update=True)
            validate_order_workflow(order, new_status)
            old_status = order.status

            if new_status == OrderStatus.PICKED:
                created = FulfillmentService._complete_pick_list(order, item_quantities or [], updated_by)
                notes = f"Pick list completed with {len(created)} short items" if created else "Pick list completed"
            elif new_status == OrderStatus.SHIPPED:
                FulfillmentService._ship(order, approve_partial_fulfillment, updated_by)
                notes = "Order shipped"
            else:
                FulfillmentService._cancel(order, updated_by)
                notes = "Order cancelled"

            order.status = new_status
            order.updated_by = updated_by
            order.save()

            OrderChangelog.log_status_change(
                order=order,
                old_status=old_status,
                new_status=new_status,
                user=updated_by,
                notes=notes
            )

            logger.info(f"Order {order.order_number} moved {old_status} -> {new_status} by {updated_by}")
            return order

    @staticmethod
    def _complete_pick_list(order: Order, item_quantities: List[Dict[str, Any]], user) -> List[UnshippedItem]:
        """
        Record picked quantities, deduct stock and create shortfall records.

        Items missing from ``item_quantities`` are treated as picked in full.

        Returns:
            UnshippedItem records created for short items
        """
        items = {item.id: item for item in order.items.select_related('product')}
        reported = FulfillmentService._validate_item_quantities(order, items, item_quantities)

        created = []
        total_requested = 0
        total_picked = 0

        for item in items.values():
            actual = reported.get(item.id, item.quantity)
            item.picked_quantity = actual
            item.save(update_fields=['picked_quantity'])

            if actual > 0:
                StockService.deduct(
                    item.product_id, actual, user,
                    reference=f"Order {order.order_number}",
                    notes=f"Picked {actual} of {item.quantity}"
                )

            if actual < item.quantity:
                unshipped = FulfillmentService._record_shortfall(order, item, actual)
                if unshipped is not None:
                    created.append(unshipped)

            total_requested += item.quantity
            total_picked += actual

        order.percentage_shipped = round(total_picked * 100 / total_requested) if total_requested else 0
        return created

    @staticmethod
    def _validate_item_quantities(order: Order, items: Dict[int, OrderItem],
                                  item_quantities: List[Dict[str, Any]]) -> Dict[int, int]:
        reported = {}
        for entry in item_quantities:
            order_item_id = entry['order_item_id']
            item = items.get(order_item_id)
            if item is None:
                raise ValidationException(
                    f"Order item {order_item_id} does not belong to order {order.order_number}",
                    {"orderItemId": order_item_id}
                )
            if order_item_id in reported:
                raise ValidationException(
                    f"Order item {order_item_id} reported more than once",
                    {"orderItemId": order_item_id}
                )

            product_id = entry.get('product_id')
            if product_id is not None and product_id != item.product_id:
                raise ValidationException(
                    f"Order item {order_item_id} is for product {item.product_id}, not {product_id}",
                    {"orderItemId": order_item_id, "productId": product_id}
                )

            requested = entry.get('requested_quantity')
            if requested is not None and requested != item.quantity:
                raise ValidationException(
                    f"Requested quantity {requested} for item {order_item_id} does not match order ({item.quantity})",
                    {"orderItemId": order_item_id, "requestedQuantity": requested}
                )

            actual = entry['actual_quantity']
            if actual < 0:
                raise ValidationException(
                    "Picked quantity cannot be negative",
                    {"orderItemId": order_item_id, "actualQuantity": actual}
                )
            if actual > item.quantity:
                raise ValidationException(
                    f"Picked quantity {actual} exceeds requested quantity {item.quantity}",
                    {"orderItemId": order_item_id, "actualQuantity": actual}
                )

            reported[order_item_id] = actual
        return reported

    @staticmethod
    def _record_shortfall(order: Order, item: OrderItem, actual: int) -> Optional[UnshippedItem]:
        shortfall = item.quantity - actual

        if UnshippedItem.objects.filter(order_item=item, shipped=False).exists():
            logger.info(f"Unshipped item already exists for order {order.order_number}, item {item.id}")
            return None

        unshipped = UnshippedItem.objects.create(
            order=order,
            order_item=item,
            product_id=item.product_id,
            quantity=shortfall,
            customer_name=order.customer_name,
            customer_id=order.customer_name,
            original_order_number=order.order_number,
            notes=f"Partially fulfilled order. {actual} out of {item.quantity} shipped.",
        )
        logger.info(
            f"Created unshipped item for order {order.order_number}, product {item.product_id}, quantity {shortfall}"
        )
        return unshipped

    @staticmethod
    def _ship(order: Order, approved: bool, user) -> None:
        outstanding = order.unshipped_items.filter(shipped=False).count()

        if outstanding:
            can_approve = getattr(user, 'can_approve_partial_fulfillment', False)
            if not approved:
                logger.warning(
                    f"Order {order.order_number} has {outstanding} unshipped items; approval required"
                )
                raise ApprovalRequiredException(order.id, outstanding, can_approve)
            if not can_approve:
                raise PartialApprovalForbiddenException(order.order_number, getattr(user, 'role', ''))

            order.partial_fulfillment_approved = True
            order.partial_fulfillment_approved_by = user
            order.partial_fulfillment_approved_at = timezone.now()

            OrderChangelog.log_change(
                order=order,
                action=ChangelogAction.PARTIAL_APPROVAL,
                user=user,
                changes={'status': OrderStatus.SHIPPED, 'unshippedItems': outstanding},
                previous_values={'status': order.status},
                notes="Partial order fulfillment approved by manager/admin"
            )
            logger.info(f"Order {order.order_number} partial fulfillment approved by {user}")

        order.actual_shipping_date = timezone.now()

    @staticmethod
    def _cancel(order: Order, user) -> None:
        if order.status != OrderStatus.PICKED:
            return

        for item in order.items.all():
            if item.picked_quantity:
                StockService.restore(
                    item.product_id, item.picked_quantity, user,
                    reference=f"Order {order.order_number} cancelled",
                    notes="Inventory restored after order cancellation"
                )
