import logging

from django.db import transaction

from .models import Product, InventoryChange

logger = logging.getLogger(__name__)


class StockService:
    """
    Service for keeping product stock levels and their change history in step.
    """

    @staticmethod
    @transaction.atomic
    def adjust_stock(product_id, quantity_delta, user=None, change_type="manual_adjustment",
                     reference="", notes=""):
        """
        Adjust a product's current stock by a delta amount.

        Stock never goes below zero; a deduction larger than the stock on hand
        is floored and the recorded delta reflects what was actually removed.

        Args:
            product_id: Product primary key
            quantity_delta: Amount to add (positive) or subtract (negative)
            user: User responsible for the change
            change_type: One of InventoryChange.CHANGE_TYPE_CHOICES
            reference: Free-text reference (e.g. order number)
            notes: Additional notes

        Returns:
            InventoryChange instance
        """
        product = Product.objects.select_for_update().get(pk=product_id)

        previous_quantity = product.current_stock
        new_quantity = max(0, previous_quantity + quantity_delta)
        if previous_quantity + quantity_delta < 0:
            logger.warning(
                f"Stock for {product.sku} floored at 0 (had {previous_quantity}, delta {quantity_delta})"
            )

        product.current_stock = new_quantity
        product.save(update_fields=["current_stock", "updated_at"])

        change = InventoryChange.objects.create(
            product=product,
            user=user,
            change_type=change_type,
            previous_quantity=previous_quantity,
            new_quantity=new_quantity,
            quantity_changed=new_quantity - previous_quantity,
            reference=reference,
            notes=notes,
        )

        logger.info(f"Stock for {product.sku} changed {previous_quantity} -> {new_quantity} ({change_type})")
        return change

    @staticmethod
    def deduct(product_id, quantity, user=None, reference="", notes=""):
        """Remove picked quantity from stock."""
        return StockService.adjust_stock(
            product_id, -quantity, user, "order_fulfillment", reference, notes
        )

    @staticmethod
    def restore(product_id, quantity, user=None, reference="", notes=""):
        """Put quantity from a cancelled order back into stock."""
        return StockService.adjust_stock(
            product_id, quantity, user, "order_cancellation", reference, notes
        )

    @staticmethod
    @transaction.atomic
    def set_stock(product_id, counted_quantity, user=None, reference="", notes=""):
        """Replace current stock with a physical count."""
        product = Product.objects.select_for_update().get(pk=product_id)
        return StockService.adjust_stock(
            product_id, counted_quantity - product.current_stock, user,
            "manual_adjustment", reference, notes
        )

    @staticmethod
    def replenish(product_id, quantity, user=None, reference="", notes=""):
        """Add received quantity to stock."""
        return StockService.adjust_stock(
            product_id, quantity, user, "stock_replenishment", reference, notes
        )
