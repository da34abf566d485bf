"""
URL configuration for the backoffice project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from products.views import ProductViewSet


@require_http_methods(["GET"])
def api_root(request):
    """API root view with available endpoints."""
    return JsonResponse({
        'message': 'Warehouse Back Office API',
        'version': '1.0.0',
        'endpoints': {
            'authentication': {
                'token': '/api/auth/token/',
                'token_refresh': '/api/auth/token/refresh/',
            },
            'orders': {
                'orders': '/api/orders',
                'status': '/api/orders/<id>/status',
                'changelogs': '/api/orders/<id>/changelogs',
            },
            'unshipped_items': {
                'list': '/api/unshipped-items',
                'pending_authorization': '/api/unshipped-items/pending-authorization',
                'authorize': '/api/unshipped-items/authorize',
            },
            'products': {
                'products': '/api/products',
                'inventory_changes': '/api/products/<id>/inventory-changes',
            },
        }
    })


# Create API router
router = DefaultRouter(trailing_slash=False)
router.register(r'products', ProductViewSet, basename='product')

urlpatterns = [
    path("admin/", admin.site.urls),

    # API endpoints
    path('api/', api_root, name='api-root'),  # Exact match for /api/ (must be first)
    path('api/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/', include('order_fulfillment.urls')),
    path('api/', include(router.urls)),
]
