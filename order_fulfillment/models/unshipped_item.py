"""
UnshippedItem model for Order Fulfillment.
"""

from django.db import models
from django.conf import settings
from django.utils import timezone


class UnshippedItem(models.Model):
    """
    Shortfall between requested and picked quantity for one order item.

    Created when a pick list completes short. ``authorized`` only flips to
    true through an explicit authorization call; records are never deleted.

    ``shipped`` and ``shipped_at`` are reserved for the later shipment that
    consumes the shortfall. Nothing in this service sets them; listings
    exclude shipped records so data written by that process is honoured.
    """

    order = models.ForeignKey(
        'Order',
        on_delete=models.PROTECT,
        related_name='unshipped_items',
        help_text="Order the shortfall originated from"
    )
    order_item = models.ForeignKey(
        'OrderItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='unshipped_items',
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.PROTECT,
        related_name='unshipped_items',
    )

    quantity = models.PositiveIntegerField(help_text="Shortfall quantity")
    customer_name = models.CharField(max_length=200, db_index=True)
    customer_id = models.CharField(max_length=200, blank=True)
    original_order_number = models.CharField(max_length=50)
    date = models.DateTimeField(default=timezone.now)

    shipped = models.BooleanField(default=False)
    shipped_at = models.DateTimeField(null=True, blank=True)

    authorized = models.BooleanField(default=False)
    authorized_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='authorized_unshipped_items',
    )
    authorized_at = models.DateTimeField(null=True, blank=True)

    notes = models.TextField(blank=True)

    class Meta:
        ordering = ['-date', '-id']
        indexes = [
            models.Index(fields=['authorized', 'shipped'], name='order_fulf_authori_62c0de_idx'),
            models.Index(fields=['order', 'shipped'], name='order_fulf_order_i_1f3b97_idx'),
        ]

    def __str__(self):
        return f"{self.original_order_number}: {self.quantity} x {self.product_id}"
