from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from .models import Product
from .serializers import (
    ProductSerializer, ProductCreateSerializer, InventoryChangeSerializer, StockAdjustmentSerializer
)
from .services import StockService
from users.permissions import IsAdminOrManager, IsWorkerOrAbove


class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all()
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["name", "sku", "description"]
    filterset_fields = ["is_active"]
    ordering_fields = ["name", "sku", "current_stock", "created_at"]
    ordering = ["name"]
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_serializer_class(self):
        if self.action == "create":
            return ProductCreateSerializer
        if self.action == "adjust_stock":
            return StockAdjustmentSerializer
        return ProductSerializer

    def get_permissions(self):
        if self.action in ["create", "partial_update", "adjust_stock"]:
            return [IsAdminOrManager()]
        return [IsWorkerOrAbove()]

    @action(detail=True, methods=["get"], url_path="inventory-changes")
    def inventory_changes(self, request, pk=None):
        """Stock change history for a product, newest first."""
        product = self.get_object()
        serializer = InventoryChangeSerializer(product.inventory_changes.all(), many=True)
        return Response(serializer.data)

    @action(detail=True, methods=["post"], url_path="adjust-stock")
    def adjust_stock(self, request, pk=None):
        """Set stock to a physical count or add received quantity."""
        product = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data["adjustment_type"] == "count":
            change = StockService.set_stock(product.id, data["quantity"], request.user, notes=data["notes"])
        else:
            change = StockService.replenish(product.id, data["quantity"], request.user, notes=data["notes"])

        product.refresh_from_db()
        return Response({
            "product": ProductSerializer(product).data,
            "change": InventoryChangeSerializer(change).data,
        })
