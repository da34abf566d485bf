"""
Tests for unshipped item listing and authorization.
"""

from django.test import TestCase
from django.contrib.auth import get_user_model
from django.utils import timezone

from products.models import Product
from ..exceptions import NotFoundException, ValidationException
from ..models import Order, UnshippedItem, ChangelogAction
from ..services import UnshippedItemService


class UnshippedItemServiceTest(TestCase):

    def setUp(self):
        User = get_user_model()
        self.front_office = User.objects.create_user(username='front', password='testpass123', role='front_office')
        self.manager = User.objects.create_user(username='manager', password='testpass123', role='manager')

        self.product = Product.objects.create(name='Widget', sku='WID-001')
        self.order = Order.objects.create(customer_name='Acme Corp', status='picked')
        self.other_order = Order.objects.create(customer_name='Globex', status='picked')

        self.authorized = self.make_item(self.order, authorized=True)
        self.pending = self.make_item(self.order)
        self.untouched = self.make_item(self.other_order)

    def make_item(self, order, authorized=False, **kwargs):
        fields = dict(
            order=order,
            product=self.product,
            quantity=2,
            customer_name=order.customer_name,
            customer_id=order.customer_name,
            original_order_number=order.order_number,
            authorized=authorized,
        )
        if authorized:
            fields.update(authorized_by=self.manager, authorized_at=timezone.now())
        fields.update(kwargs)
        return UnshippedItem.objects.create(**fields)

    def test_already_authorized_item_is_a_no_op(self):
        original_authorized_at = self.authorized.authorized_at

        result = UnshippedItemService.authorize([self.authorized.id, self.pending.id], self.front_office)

        self.assertEqual(result['authorized_ids'], [self.pending.id])
        self.assertEqual(result['already_authorized_ids'], [self.authorized.id])

        self.pending.refresh_from_db()
        self.assertTrue(self.pending.authorized)
        self.assertEqual(self.pending.authorized_by, self.front_office)
        self.assertIsNotNone(self.pending.authorized_at)

        self.authorized.refresh_from_db()
        self.assertEqual(self.authorized.authorized_by, self.manager)
        self.assertEqual(self.authorized.authorized_at, original_authorized_at)

    def test_items_outside_the_batch_untouched(self):
        UnshippedItemService.authorize([self.pending.id], self.front_office)

        self.untouched.refresh_from_db()
        self.assertFalse(self.untouched.authorized)
        self.assertIsNone(self.untouched.authorized_by)

    def test_unknown_id_changes_nothing(self):
        with self.assertRaises(NotFoundException) as ctx:
            UnshippedItemService.authorize([self.pending.id, 999999], self.front_office)

        self.assertEqual(ctx.exception.details['missingIds'], [999999])
        self.pending.refresh_from_db()
        self.assertFalse(self.pending.authorized)

    def test_empty_batch_rejected(self):
        with self.assertRaises(ValidationException):
            UnshippedItemService.authorize([], self.front_office)

    def test_authorization_writes_changelog(self):
        UnshippedItemService.authorize([self.pending.id], self.front_office)

        changelog = self.order.changelogs.get(action=ChangelogAction.UNSHIPPED_AUTHORIZATION)
        self.assertEqual(changelog.changes['itemId'], self.pending.id)
        self.assertEqual(changelog.changes['authorizedByRole'], 'front_office')
        self.assertEqual(changelog.previous_values, {'authorized': False})

    def test_list_excludes_shipped(self):
        shipped = self.make_item(self.order, shipped=True)

        ids = set(UnshippedItemService.list_unshipped().values_list('id', flat=True))

        self.assertNotIn(shipped.id, ids)
        self.assertEqual(ids, {self.authorized.id, self.pending.id, self.untouched.id})

    def test_customer_filter(self):
        ids = set(UnshippedItemService.list_unshipped('acme corp').values_list('id', flat=True))
        self.assertEqual(ids, {self.authorized.id, self.pending.id})

    def test_pending_authorization(self):
        ids = set(UnshippedItemService.list_pending_authorization().values_list('id', flat=True))
        self.assertEqual(ids, {self.pending.id, self.untouched.id})
