"""
Order serializers for Order Fulfillment.

Wire format uses camelCase keys; validated data comes out snake_case so it
can be handed straight to the services.
"""

from rest_framework import serializers

from ..models import Order, OrderItem, OrderStatus, OrderPriority


class OrderItemSerializer(serializers.ModelSerializer):
    """Serializer for OrderItem model."""

    productId = serializers.IntegerField(source='product_id', read_only=True)
    productName = serializers.CharField(source='product.name', read_only=True)
    productSku = serializers.CharField(source='product.sku', read_only=True)
    pickedQuantity = serializers.IntegerField(source='picked_quantity', read_only=True)
    shortfall = serializers.IntegerField(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id', 'productId', 'productName', 'productSku',
            'quantity', 'pickedQuantity', 'shortfall',
        ]
        read_only_fields = ['id', 'quantity']


class OrderItemInputSerializer(serializers.Serializer):
    """Line item as submitted on create/update."""

    productId = serializers.IntegerField(source='product_id')
    quantity = serializers.IntegerField()

    def validate_quantity(self, value):
        """Validate ordered quantity."""
        if value < 1:
            raise serializers.ValidationError("Quantity must be at least 1")
        return value


class OrderCreateSerializer(serializers.Serializer):
    """Serializer for creating orders."""

    customerName = serializers.CharField(source='customer_name', min_length=2, max_length=200)
    priority = serializers.ChoiceField(choices=OrderPriority.choices, default=OrderPriority.MEDIUM)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    estimatedShippingDate = serializers.DateTimeField(
        source='estimated_shipping_date', required=False, allow_null=True
    )
    items = OrderItemInputSerializer(many=True)

    def validate_items(self, value):
        """Validate order items."""
        if not value:
            raise serializers.ValidationError("Order must contain at least one item")

        product_ids = [item['product_id'] for item in value]
        if len(product_ids) != len(set(product_ids)):
            raise serializers.ValidationError("Duplicate products in order")

        return value


class OrderUpdateSerializer(OrderCreateSerializer):
    """Serializer for updating orders; every field is optional."""

    customerName = serializers.CharField(source='customer_name', min_length=2, max_length=200, required=False)
    priority = serializers.ChoiceField(choices=OrderPriority.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    items = OrderItemInputSerializer(many=True, required=False)


class OrderListSerializer(serializers.ModelSerializer):
    """Serializer for order listing."""

    orderNumber = serializers.CharField(source='order_number', read_only=True)
    customerName = serializers.CharField(source='customer_name', read_only=True)
    orderDate = serializers.DateTimeField(source='order_date', read_only=True)
    percentageShipped = serializers.IntegerField(source='percentage_shipped', read_only=True)
    itemsCount = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'orderNumber', 'customerName', 'status', 'priority',
            'orderDate', 'percentageShipped', 'itemsCount',
        ]

    def get_itemsCount(self, obj):
        return obj.items.count()


class OrderDetailSerializer(serializers.ModelSerializer):
    """Serializer for order details."""

    orderNumber = serializers.CharField(source='order_number', read_only=True)
    customerName = serializers.CharField(source='customer_name', read_only=True)
    orderDate = serializers.DateTimeField(source='order_date', read_only=True)
    estimatedShippingDate = serializers.DateTimeField(source='estimated_shipping_date', read_only=True)
    actualShippingDate = serializers.DateTimeField(source='actual_shipping_date', read_only=True)
    partialFulfillmentApproved = serializers.BooleanField(source='partial_fulfillment_approved', read_only=True)
    partialFulfillmentApprovedById = serializers.IntegerField(
        source='partial_fulfillment_approved_by_id', read_only=True
    )
    partialFulfillmentApprovedAt = serializers.DateTimeField(
        source='partial_fulfillment_approved_at', read_only=True
    )
    percentageShipped = serializers.IntegerField(source='percentage_shipped', read_only=True)
    createdById = serializers.IntegerField(source='created_by_id', read_only=True)
    updatedById = serializers.IntegerField(source='updated_by_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'orderNumber', 'customerName', 'status', 'priority',
            'orderDate', 'estimatedShippingDate', 'actualShippingDate', 'notes',
            'partialFulfillmentApproved', 'partialFulfillmentApprovedById',
            'partialFulfillmentApprovedAt', 'percentageShipped',
            'createdById', 'updatedById', 'createdAt', 'updatedAt',
            'items',
        ]


class ItemQuantitySerializer(serializers.Serializer):
    """Per-item quantities reported when a pick list is completed."""

    orderItemId = serializers.IntegerField(source='order_item_id')
    productId = serializers.IntegerField(source='product_id', required=False)
    requestedQuantity = serializers.IntegerField(source='requested_quantity', required=False)
    actualQuantity = serializers.IntegerField(source='actual_quantity')


class OrderStatusUpdateSerializer(serializers.Serializer):
    """Body of PATCH /orders/:id/status."""

    status = serializers.ChoiceField(choices=OrderStatus.choices)
    itemQuantities = ItemQuantitySerializer(many=True, required=False, source='item_quantities')
    approvePartialFulfillment = serializers.BooleanField(
        source='approve_partial_fulfillment', required=False, default=False
    )
