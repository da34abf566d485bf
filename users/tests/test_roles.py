from django.test import TestCase
from django.contrib.auth import get_user_model


class UserRoleTest(TestCase):

    def make_user(self, username, **kwargs):
        return get_user_model().objects.create_user(username=username, password='testpass123', **kwargs)

    def test_approval_rights(self):
        cases = {
            'admin': (True, True),
            'manager': (True, True),
            'front_office': (False, True),
            'warehouse': (False, False),
        }
        for role, (can_approve, can_authorize) in cases.items():
            with self.subTest(role=role):
                user = self.make_user(f'user_{role}', role=role)
                self.assertEqual(user.can_approve_partial_fulfillment, can_approve)
                self.assertEqual(user.can_authorize_unshipped_items, can_authorize)

    def test_superuser_counts_as_admin(self):
        user = get_user_model().objects.create_superuser(username='root', password='testpass123', email='')
        self.assertTrue(user.is_admin)
        self.assertTrue(user.can_approve_partial_fulfillment)

    def test_default_role(self):
        user = self.make_user('new')
        self.assertEqual(user.role, 'warehouse')
        self.assertEqual(user.full_name, 'new')
