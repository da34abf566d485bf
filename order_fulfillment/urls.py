"""
URL configuration for Order Fulfillment.

Provides API endpoints for orders and unshipped items.
"""

from rest_framework.routers import DefaultRouter

from .views import OrderViewSet, UnshippedItemViewSet

# Create router and register viewsets
router = DefaultRouter(trailing_slash=False)
router.register(r'orders', OrderViewSet, basename='order')
router.register(r'unshipped-items', UnshippedItemViewSet, basename='unshipped-item')

# URL patterns
urlpatterns = router.urls
