from django.conf import settings
from django.db import models


class Product(models.Model):
    name = models.CharField(max_length=200)
    sku = models.CharField(max_length=100, unique=True, db_index=True)
    description = models.TextField(blank=True)
    current_stock = models.IntegerField(default=0)
    min_stock_level = models.IntegerField(default=0, help_text="Reorder threshold")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        verbose_name = "Product"
        verbose_name_plural = "Products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active"], name="products_is_acti_7c1e0b_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    @property
    def is_low_stock(self):
        return self.current_stock <= self.min_stock_level


class InventoryChange(models.Model):
    CHANGE_TYPE_CHOICES = [
        ("order_fulfillment", "Order Fulfillment"),
        ("order_cancellation", "Order Cancellation"),
        ("manual_adjustment", "Manual Adjustment"),
        ("stock_replenishment", "Stock Replenishment"),
    ]

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="inventory_changes")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="inventory_changes",
    )
    change_type = models.CharField(max_length=30, choices=CHANGE_TYPE_CHOICES)
    previous_quantity = models.IntegerField()
    new_quantity = models.IntegerField()
    quantity_changed = models.IntegerField(help_text="Signed delta applied to current stock")
    reference = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "inventory_changes"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["product", "-created_at"], name="inventory_c_product_3f9a21_idx"),
            models.Index(fields=["change_type"], name="inventory_c_change__b84d0e_idx"),
        ]

    def __str__(self):
        return f"{self.product.sku}: {self.previous_quantity} -> {self.new_quantity} ({self.change_type})"
