"""
Unshipped item serializers for Order Fulfillment.
"""

from rest_framework import serializers

from ..models import UnshippedItem


class UnshippedItemSerializer(serializers.ModelSerializer):
    orderId = serializers.IntegerField(source='order_id', read_only=True)
    orderItemId = serializers.IntegerField(source='order_item_id', read_only=True)
    productId = serializers.IntegerField(source='product_id', read_only=True)
    productName = serializers.CharField(source='product.name', read_only=True)
    productSku = serializers.CharField(source='product.sku', read_only=True)
    customerName = serializers.CharField(source='customer_name', read_only=True)
    customerId = serializers.CharField(source='customer_id', read_only=True)
    originalOrderNumber = serializers.CharField(source='original_order_number', read_only=True)
    shippedAt = serializers.DateTimeField(source='shipped_at', read_only=True)
    authorizedById = serializers.IntegerField(source='authorized_by_id', read_only=True)
    authorizedAt = serializers.DateTimeField(source='authorized_at', read_only=True)

    class Meta:
        model = UnshippedItem
        fields = [
            'id', 'orderId', 'orderItemId', 'productId', 'productName', 'productSku',
            'quantity', 'customerName', 'customerId', 'originalOrderNumber', 'date',
            'shipped', 'shippedAt', 'authorized', 'authorizedById', 'authorizedAt',
            'notes',
        ]


class AuthorizeUnshippedItemsSerializer(serializers.Serializer):
    itemIds = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
        source='item_ids',
    )
