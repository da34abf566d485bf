"""
Custom permissions for Order Fulfillment.
"""

from rest_framework.permissions import BasePermission


class IsBackofficeUser(BasePermission):
    """
    Any authenticated, active back-office user.

    Order entry, picking and shipping are open to every role; the partial
    fulfillment approval is checked by the service.
    """

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_active)


class CanAuthorizeUnshippedItems(BasePermission):
    """
    Permission for authorizing unshipped items.

    Restricted to admin, manager and front office roles.
    """

    message = "Only admin, manager or front office users can authorize unshipped items."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        return user.can_authorize_unshipped_items
