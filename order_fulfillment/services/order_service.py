"""
Order Service for Order Fulfillment.

Handles order creation and updates. Status changes live in
FulfillmentService.
"""

import logging
from typing import Dict, Any, List, Optional, Tuple
from django.db import transaction

from products.models import Product
from ..models import Order, OrderItem, OrderStatus, OrderChangelog, ChangelogAction, UnshippedItem
from ..exceptions import BusinessException, ValidationException, NotFoundException

logger = logging.getLogger(__name__)


class OrderService:
    """Service class for order operations."""

    UPDATABLE_FIELDS = ['customer_name', 'priority', 'notes', 'estimated_shipping_date']

    @staticmethod
    def get_order(order_id, for_update: bool = False) -> Order:
        """
        Fetch an order or raise NotFoundException.

        Args:
            order_id: Order primary key
            for_update: Lock the row for the current transaction
        """
        queryset = Order.objects.select_for_update() if for_update else Order.objects.all()
        try:
            return queryset.get(id=order_id)
        except Order.DoesNotExist:
            raise NotFoundException(f"Order {order_id} not found", {"orderId": order_id})

    @staticmethod
    def create_order(order_data: Dict[str, Any], created_by=None) -> Tuple[Order, Optional[Dict[str, Any]]]:
        """
        Create a new order with items.

        Args:
            order_data: Order data including customer_name and items
            created_by: User creating the order

        Returns:
            (created Order, warning) where warning is set when the customer
            still has unshipped items from earlier orders

        Raises:
            ValidationException: If order data is invalid
        """
        items_data = order_data.get('items', [])
        if not items_data:
            raise ValidationException("Order must contain at least one item")

        customer_name = order_data['customer_name']

        with transaction.atomic():
            products = OrderService._load_products(items_data)

            order = Order.objects.create(
                customer_name=customer_name,
                priority=order_data.get('priority', 'medium'),
                notes=order_data.get('notes', ''),
                estimated_shipping_date=order_data.get('estimated_shipping_date'),
                created_by=created_by,
                updated_by=created_by,
            )
            OrderService._create_items(order, items_data, products)

            OrderChangelog.log_change(
                order=order,
                action=ChangelogAction.CREATE,
                user=created_by,
                changes={
                    'status': OrderStatus.PENDING,
                    'customerName': customer_name,
                    'items': OrderService._items_snapshot(order),
                },
                notes=f"Order created with {len(items_data)} items"
            )

        outstanding = UnshippedItem.objects.filter(
            customer_name__iexact=customer_name, shipped=False
        ).count()
        warning = None
        if outstanding:
            warning = {
                'hasUnshippedItems': True,
                'unshippedItemsCount': outstanding,
                'message': f"Customer has {outstanding} unfulfilled item(s) from previous orders.",
            }
            logger.info(f"Customer {customer_name} has {outstanding} unshipped items")

        logger.info(f"Order {order.order_number} created for customer {customer_name}")
        return order, warning

    @staticmethod
    def update_order(order_id, update_data: Dict[str, Any], updated_by) -> Order:
        """
        Update order information and, while pending, its items.

        Args:
            order_id: Order primary key
            update_data: Fields to update; ``items`` replaces all line items
            updated_by: User making the update

        Returns:
            Updated Order instance

        Raises:
            BusinessException: If order cannot be updated
        """
        with transaction.atomic():
            order = OrderService.get_order(order_id, for_update=True)

            if order.is_terminal:
                raise BusinessException(
                    f"Order {order.order_number} cannot be updated in status {order.status}",
                    "ORDER_NOT_UPDATABLE"
                )

            old_values = {}
            new_values = {}

            for field in OrderService.UPDATABLE_FIELDS:
                if field in update_data and getattr(order, field) != update_data[field]:
                    old_values[field] = getattr(order, field)
                    setattr(order, field, update_data[field])
                    new_values[field] = update_data[field]

            items_data = update_data.get('items')
            if items_data is not None:
                if order.status != OrderStatus.PENDING:
                    raise BusinessException(
                        f"Items of order {order.order_number} are locked once picking is complete",
                        "ITEMS_LOCKED"
                    )
                if not items_data:
                    raise ValidationException("Order must contain at least one item")

                products = OrderService._load_products(items_data)
                old_values['items'] = OrderService._items_snapshot(order)
                order.items.all().delete()
                OrderService._create_items(order, items_data, products)
                new_values['items'] = OrderService._items_snapshot(order)

            order.updated_by = updated_by
            order.save()

            if new_values:
                OrderChangelog.log_change(
                    order=order,
                    action=ChangelogAction.UPDATE,
                    user=updated_by,
                    changes=new_values,
                    previous_values=old_values,
                    notes="Order items updated" if 'items' in new_values else "Order information updated"
                )

            logger.info(f"Order {order.order_number} updated by {updated_by}")
            return order

    @staticmethod
    def _load_products(items_data: List[Dict[str, Any]]) -> Dict[int, Product]:
        product_ids = {item['product_id'] for item in items_data}
        products = Product.objects.in_bulk(product_ids)
        missing = sorted(product_ids - set(products))
        if missing:
            raise ValidationException(
                f"Unknown products: {missing}",
                {"productIds": missing}
            )
        return products

    @staticmethod
    def _create_items(order: Order, items_data: List[Dict[str, Any]], products: Dict[int, Product]) -> None:
        for item_data in items_data:
            quantity = item_data['quantity']
            if quantity < 1:
                raise ValidationException(
                    f"Quantity for product {item_data['product_id']} must be at least 1",
                    {"productId": item_data['product_id'], "quantity": quantity}
                )
            OrderItem.objects.create(
                order=order,
                product=products[item_data['product_id']],
                quantity=quantity,
            )

    @staticmethod
    def _items_snapshot(order: Order) -> List[Dict[str, Any]]:
        return [
            {'productId': item.product_id, 'quantity': item.quantity}
            for item in order.items.all()
        ]
