"""
Tests for StockService.
"""

from django.test import TestCase
from django.contrib.auth import get_user_model

from ..models import Product, InventoryChange
from ..services import StockService


class StockServiceTest(TestCase):

    def setUp(self):
        self.user = get_user_model().objects.create_user(username='stock', password='testpass123')
        self.product = Product.objects.create(name='Widget', sku='WID-001', current_stock=10)

    def test_deduct_records_change(self):
        change = StockService.deduct(self.product.id, 4, self.user, reference='Order ORD-0001')

        self.product.refresh_from_db()
        self.assertEqual(self.product.current_stock, 6)
        self.assertEqual(change.change_type, 'order_fulfillment')
        self.assertEqual(change.previous_quantity, 10)
        self.assertEqual(change.new_quantity, 6)
        self.assertEqual(change.quantity_changed, -4)
        self.assertEqual(change.reference, 'Order ORD-0001')
        self.assertEqual(change.user, self.user)

    def test_stock_floored_at_zero(self):
        with self.assertLogs('products.services', level='WARNING'):
            change = StockService.deduct(self.product.id, 15, self.user)

        self.product.refresh_from_db()
        self.assertEqual(self.product.current_stock, 0)
        self.assertEqual(change.quantity_changed, -10)

    def test_restore(self):
        StockService.restore(self.product.id, 3, self.user)

        self.product.refresh_from_db()
        self.assertEqual(self.product.current_stock, 13)
        self.assertEqual(
            InventoryChange.objects.get(product=self.product).change_type,
            'order_cancellation'
        )

    def test_low_stock(self):
        self.product.min_stock_level = 6
        self.product.save()
        self.assertFalse(self.product.is_low_stock)

        StockService.adjust_stock(self.product.id, -4, self.user)
        self.product.refresh_from_db()
        self.assertTrue(self.product.is_low_stock)

    def test_set_stock_from_count(self):
        change = StockService.set_stock(self.product.id, 7, self.user, notes='Cycle count')

        self.product.refresh_from_db()
        self.assertEqual(self.product.current_stock, 7)
        self.assertEqual(change.change_type, 'manual_adjustment')
        self.assertEqual(change.quantity_changed, -3)

    def test_replenish(self):
        change = StockService.replenish(self.product.id, 5, self.user)

        self.product.refresh_from_db()
        self.assertEqual(self.product.current_stock, 15)
        self.assertEqual(change.change_type, 'stock_replenishment')
        self.assertEqual(change.quantity_changed, 5)
