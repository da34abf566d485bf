"""
OrderItem model for Order Fulfillment.
"""

from django.db import models


class OrderItem(models.Model):
    """
    Line item within an order.

    ``quantity`` is what was requested when the order was entered;
    ``picked_quantity`` is what the picker actually collected.
    """

    order = models.ForeignKey(
        'Order',
        on_delete=models.CASCADE,
        related_name='items',
        help_text="Order this item belongs to"
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.PROTECT,
        related_name='order_items',
    )

    quantity = models.PositiveIntegerField(
        help_text="Requested quantity"
    )
    picked_quantity = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Actual quantity picked; empty until the pick list is completed"
    )

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        return f"{self.product.sku} - {self.quantity} units"

    @property
    def requested_quantity(self):
        return self.quantity

    @property
    def shortfall(self):
        """Quantity requested but not picked."""
        if self.picked_quantity is None:
            return 0
        return max(0, self.quantity - self.picked_quantity)

    @property
    def is_fully_picked(self):
        return self.picked_quantity is not None and self.picked_quantity >= self.quantity
