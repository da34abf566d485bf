"""
API tests for orders and unshipped items.
"""

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from products.models import Product
from ..models import Order, OrderStatus, UnshippedItem


class OrderApiTestCase(APITestCase):

    def setUp(self):
        User = get_user_model()
        self.warehouse = User.objects.create_user(username='picker', password='testpass123', role='warehouse')
        self.manager = User.objects.create_user(
            username='manager', password='testpass123', role='manager', first_name='Maria', last_name='Lopez'
        )
        self.front_office = User.objects.create_user(username='front', password='testpass123', role='front_office')

        self.widget = Product.objects.create(name='Widget', sku='WID-001', current_stock=20)
        self.gadget = Product.objects.create(name='Gadget', sku='GAD-001', current_stock=10)

        self.client.force_authenticate(self.warehouse)

    def create_order(self, customer_name='Acme Corp'):
        response = self.client.post('/api/orders', {
            'customerName': customer_name,
            'priority': 'high',
            'items': [
                {'productId': self.widget.id, 'quantity': 5},
                {'productId': self.gadget.id, 'quantity': 3},
            ],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data['order']

    def item_quantities(self, order, widget_qty=5, gadget_qty=1):
        actual = {self.widget.id: widget_qty, self.gadget.id: gadget_qty}
        return [
            {
                'orderItemId': item['id'],
                'productId': item['productId'],
                'requestedQuantity': item['quantity'],
                'actualQuantity': actual[item['productId']],
            }
            for item in order['items']
        ]

    def pick(self, order, **quantities):
        response = self.client.patch(f"/api/orders/{order['id']}/status", {
            'status': 'picked',
            'itemQuantities': self.item_quantities(order, **quantities),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return response.data


class OrderEndpointsTest(OrderApiTestCase):

    def test_create_order(self):
        response = self.client.post('/api/orders', {
            'customerName': 'Acme Corp',
            'items': [{'productId': self.widget.id, 'quantity': 2}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        order = response.data['order']
        self.assertEqual(order['customerName'], 'Acme Corp')
        self.assertEqual(order['status'], 'pending')
        self.assertEqual(order['priority'], 'medium')
        self.assertTrue(order['orderNumber'].startswith('ORD-'))
        self.assertEqual(order['items'][0]['productSku'], 'WID-001')
        self.assertIsNone(response.data['warning'])

    def test_create_order_rejects_duplicate_products(self):
        response = self.client.post('/api/orders', {
            'customerName': 'Acme Corp',
            'items': [
                {'productId': self.widget.id, 'quantity': 1},
                {'productId': self.widget.id, 'quantity': 2},
            ],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('items', response.data)

    def test_create_order_unknown_product(self):
        response = self.client.post('/api/orders', {
            'customerName': 'Acme Corp',
            'items': [{'productId': 9999, 'quantity': 1}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error']['code'], 'VALIDATION_ERROR')

    def test_update_order(self):
        order = self.create_order()

        response = self.client.patch(f"/api/orders/{order['id']}", {
            'notes': 'Deliver to dock 4',
            'items': [{'productId': self.gadget.id, 'quantity': 1}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['notes'], 'Deliver to dock 4')
        self.assertEqual(len(response.data['items']), 1)

    def test_list_and_filter(self):
        self.create_order()
        second = self.create_order('Globex')
        self.pick(second, gadget_qty=3)

        response = self.client.get('/api/orders', {'status': 'picked'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([order['id'] for order in response.data], [second['id']])
        self.assertEqual(response.data[0]['itemsCount'], 2)

    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        response = self.client.get('/api/orders')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_changelogs_newest_first(self):
        order = self.create_order()
        self.pick(order)

        response = self.client.get(f"/api/orders/{order['id']}/changelogs")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry['action'] for entry in response.data], ['status_change', 'create'])
        self.assertEqual(response.data[0]['previousValues'], {'status': 'pending'})
        self.assertEqual(response.data[0]['user'], {
            'id': self.warehouse.id, 'username': 'picker', 'fullName': 'picker',
        })


class StatusEndpointTest(OrderApiTestCase):

    def test_short_pick(self):
        order = self.create_order()

        picked = self.pick(order, widget_qty=5, gadget_qty=1)

        self.assertEqual(picked['status'], 'picked')
        self.assertEqual(picked['percentageShipped'], 75)
        unshipped = UnshippedItem.objects.get()
        self.assertEqual(unshipped.quantity, 2)
        self.assertFalse(unshipped.authorized)

    def test_invalid_transition(self):
        order = self.create_order()

        response = self.client.patch(f"/api/orders/{order['id']}/status", {'status': 'shipped'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error']['code'], 'INVALID_TRANSITION')

    def test_unknown_status(self):
        order = self.create_order()

        response = self.client.patch(f"/api/orders/{order['id']}/status", {'status': 'lost'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_over_pick_rejected(self):
        order = self.create_order()

        response = self.client.patch(f"/api/orders/{order['id']}/status", {
            'status': 'picked',
            'itemQuantities': self.item_quantities(order, widget_qty=7),
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Order.objects.get(pk=order['id']).status, OrderStatus.PENDING)

    def test_ship_requires_approval(self):
        order = self.create_order()
        self.pick(order)

        response = self.client.patch(f"/api/orders/{order['id']}/status", {'status': 'shipped'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data, {
            'message': 'Partial order fulfillment requires explicit approval',
            'requiresApproval': True,
            'isPartialFulfillment': True,
            'orderId': order['id'],
            'unshippedItems': 1,
            'canApprove': False,
        })

    def test_warehouse_cannot_approve_partial_shipment(self):
        order = self.create_order()
        self.pick(order)

        response = self.client.patch(f"/api/orders/{order['id']}/status", {
            'status': 'shipped', 'approvePartialFulfillment': True,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertNotIn('requiresApproval', response.data)
        self.assertEqual(response.data['error']['code'], 'PARTIAL_APPROVAL_FORBIDDEN')

    def test_manager_approves_partial_shipment(self):
        order = self.create_order()
        self.pick(order)
        self.client.force_authenticate(self.manager)

        response = self.client.patch(f"/api/orders/{order['id']}/status", {
            'status': 'shipped', 'approvePartialFulfillment': True,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'shipped')
        self.assertTrue(response.data['partialFulfillmentApproved'])
        self.assertEqual(response.data['partialFulfillmentApprovedById'], self.manager.id)


class UnshippedItemEndpointsTest(OrderApiTestCase):

    def setUp(self):
        super().setUp()
        self.order = self.create_order()
        self.pick(self.order, widget_qty=4, gadget_qty=1)
        self.widget_short = UnshippedItem.objects.get(product=self.widget)
        self.gadget_short = UnshippedItem.objects.get(product=self.gadget)

    def test_list(self):
        response = self.client.get('/api/unshipped-items')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]['originalOrderNumber'], self.order['orderNumber'])

    def test_customer_filter(self):
        response = self.client.get('/api/unshipped-items', {'customerId': 'globex'})
        self.assertEqual(response.data, [])

    def test_authorize(self):
        self.widget_short.authorized = True
        self.widget_short.authorized_by = self.manager
        self.widget_short.save()
        self.client.force_authenticate(self.front_office)

        response = self.client.post('/api/unshipped-items/authorize', {
            'itemIds': [self.widget_short.id, self.gadget_short.id],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['success'], True)
        self.assertEqual(response.data['authorizedItems'], 1)
        self.assertEqual(response.data['alreadyAuthorized'], [self.widget_short.id])

        pending = self.client.get('/api/unshipped-items/pending-authorization')
        self.assertEqual(pending.data, [])

    def test_warehouse_cannot_authorize(self):
        response = self.client.post('/api/unshipped-items/authorize', {
            'itemIds': [self.gadget_short.id],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.gadget_short.refresh_from_db()
        self.assertFalse(self.gadget_short.authorized)

    def test_empty_batch(self):
        self.client.force_authenticate(self.front_office)

        response = self.client.post('/api/unshipped-items/authorize', {'itemIds': []}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_id(self):
        self.client.force_authenticate(self.front_office)

        response = self.client.post('/api/unshipped-items/authorize', {
            'itemIds': [self.gadget_short.id, 999999],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'NOT_FOUND')
        self.gadget_short.refresh_from_db()
        self.assertFalse(self.gadget_short.authorized)

    def test_create_order_warns_about_unshipped_items(self):
        response = self.client.post('/api/orders', {
            'customerName': 'ACME CORP',
            'items': [{'productId': self.widget.id, 'quantity': 1}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['warning']['hasUnshippedItems'])
        self.assertEqual(response.data['warning']['unshippedItemsCount'], 2)
