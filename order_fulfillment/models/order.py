"""
Order model for Order Fulfillment.
"""

from django.db import models
from django.conf import settings
from django.utils import timezone


class OrderStatus(models.TextChoices):
    """Order status enumeration with workflow states."""
    PENDING = 'pending', 'Pending'
    PICKED = 'picked', 'Picked'
    SHIPPED = 'shipped', 'Shipped'
    CANCELLED = 'cancelled', 'Cancelled'


class OrderPriority(models.TextChoices):
    """Order priority levels."""
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'
    URGENT = 'urgent', 'Urgent'


class Order(models.Model):
    """
    Customer order moving through the pick/ship workflow.

    The server owns the status; clients only request transitions through
    the status endpoint.
    """

    order_number = models.CharField(
        max_length=50,
        unique=True,
        null=True,
        blank=True,
        help_text="Unique order identifier (auto-generated from the id)"
    )
    customer_name = models.CharField(
        max_length=200,
        db_index=True,
        help_text="Customer the order is for"
    )

    # Status and priority
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        help_text="Current order status in the fulfillment workflow"
    )
    priority = models.CharField(
        max_length=10,
        choices=OrderPriority.choices,
        default=OrderPriority.MEDIUM,
        help_text="Order priority level"
    )

    # Dates
    order_date = models.DateTimeField(default=timezone.now)
    estimated_shipping_date = models.DateTimeField(null=True, blank=True)
    actual_shipping_date = models.DateTimeField(null=True, blank=True)

    notes = models.TextField(
        blank=True,
        help_text="Order notes or special instructions"
    )

    # Partial fulfillment approval
    partial_fulfillment_approved = models.BooleanField(default=False)
    partial_fulfillment_approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_partial_orders',
        help_text="Manager/admin who approved shipping with unshipped items"
    )
    partial_fulfillment_approved_at = models.DateTimeField(null=True, blank=True)
    percentage_shipped = models.PositiveSmallIntegerField(
        default=0,
        help_text="Share of requested quantity actually picked, 0-100"
    )

    # Audit fields
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_orders',
        help_text="User who created the order"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='updated_orders',
        help_text="User who last updated the order"
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', 'priority'], name='order_fulf_status_4e1a2c_idx'),
            models.Index(fields=['customer_name', 'status'], name='order_fulf_custome_9b7d3f_idx'),
            models.Index(fields=['created_at'], name='order_fulf_created_a51c08_idx'),
        ]

    def __str__(self):
        return f"Order {self.order_number} - {self.customer_name}"

    def save(self, *args, **kwargs):
        """Override save to derive the order number from the id on first insert."""
        super().save(*args, **kwargs)
        if not self.order_number:
            self.order_number = f"ORD-{self.pk:04d}"
            super().save(update_fields=['order_number'])

    @property
    def is_picked(self):
        """Check if picking has been completed."""
        return self.status in [OrderStatus.PICKED, OrderStatus.SHIPPED]

    @property
    def is_shipped(self):
        return self.status == OrderStatus.SHIPPED

    @property
    def is_terminal(self):
        """Shipped and cancelled orders accept no further transitions."""
        return self.status in [OrderStatus.SHIPPED, OrderStatus.CANCELLED]

    @property
    def can_be_cancelled(self):
        """Check if order can still be cancelled."""
        return self.status in [OrderStatus.PENDING, OrderStatus.PICKED]
