"""
Order views for Order Fulfillment.
"""

from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from ..models import Order
from ..services import OrderService, FulfillmentService
from ..serializers.order_serializers import (
    OrderCreateSerializer, OrderUpdateSerializer, OrderListSerializer,
    OrderDetailSerializer, OrderStatusUpdateSerializer
)
from ..serializers.changelog_serializers import OrderChangelogSerializer
from ..permissions import IsBackofficeUser


class OrderViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Order management.

    Provides create/read/update operations and the status workflow action.
    Business failures raised by the services are rendered by the project's
    exception handler.
    """

    queryset = Order.objects.prefetch_related('items__product')
    permission_classes = [IsBackofficeUser]
    http_method_names = ['get', 'post', 'patch', 'head', 'options']
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'priority']
    search_fields = ['order_number', 'customer_name', 'notes']
    ordering_fields = ['created_at', 'order_date', 'priority', 'status']

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action == 'create':
            return OrderCreateSerializer
        elif self.action == 'partial_update':
            return OrderUpdateSerializer
        elif self.action == 'list':
            return OrderListSerializer
        elif self.action == 'update_status':
            return OrderStatusUpdateSerializer
        elif self.action == 'changelogs':
            return OrderChangelogSerializer
        else:
            return OrderDetailSerializer

    def create(self, request, *args, **kwargs):
        """Create an order with its items."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order, warning = OrderService.create_order(serializer.validated_data, request.user)
        return Response({
            'order': OrderDetailSerializer(order).data,
            'warning': warning,
        }, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        """Update order fields and, while pending, replace its items."""
        order = self.get_object()
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated_order = OrderService.update_order(order.id, serializer.validated_data, request.user)
        return Response(OrderDetailSerializer(updated_order).data)

    @action(detail=True, methods=['patch'], url_path='status')
    def update_status(self, request, pk=None):
        """Move the order through the pick/ship workflow."""
        order = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated_order = FulfillmentService.update_status(
            order.id,
            serializer.validated_data['status'],
            request.user,
            item_quantities=serializer.validated_data.get('item_quantities'),
            approve_partial_fulfillment=serializer.validated_data['approve_partial_fulfillment'],
        )
        return Response(OrderDetailSerializer(updated_order).data)

    @action(detail=True, methods=['get'])
    def changelogs(self, request, pk=None):
        """Audit trail for the order, newest first."""
        order = self.get_object()
        serializer = self.get_serializer(order.changelogs.select_related('user'), many=True)
        return Response(serializer.data)
