from rest_framework import serializers

from .models import Product, InventoryChange


class ProductSerializer(serializers.ModelSerializer):
    currentStock = serializers.IntegerField(source="current_stock", read_only=True)
    minStockLevel = serializers.IntegerField(source="min_stock_level", required=False)
    isActive = serializers.BooleanField(source="is_active", required=False)
    isLowStock = serializers.BooleanField(source="is_low_stock", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "sku",
            "description",
            "currentStock",
            "minStockLevel",
            "isActive",
            "isLowStock",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]


class ProductCreateSerializer(ProductSerializer):
    currentStock = serializers.IntegerField(source="current_stock", min_value=0, required=False)


class InventoryChangeSerializer(serializers.ModelSerializer):
    productId = serializers.IntegerField(source="product_id", read_only=True)
    userId = serializers.IntegerField(source="user_id", read_only=True)
    changeType = serializers.CharField(source="change_type", read_only=True)
    previousQuantity = serializers.IntegerField(source="previous_quantity", read_only=True)
    newQuantity = serializers.IntegerField(source="new_quantity", read_only=True)
    quantityChanged = serializers.IntegerField(source="quantity_changed", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = InventoryChange
        fields = [
            "id",
            "productId",
            "userId",
            "changeType",
            "previousQuantity",
            "newQuantity",
            "quantityChanged",
            "reference",
            "notes",
            "createdAt",
        ]


class StockAdjustmentSerializer(serializers.Serializer):
    ADJUSTMENT_TYPES = [("count", "Set to counted quantity"), ("add", "Add to current stock")]

    quantity = serializers.IntegerField()
    adjustmentType = serializers.ChoiceField(source="adjustment_type", choices=ADJUSTMENT_TYPES)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        if attrs["adjustment_type"] == "count" and attrs["quantity"] < 0:
            raise serializers.ValidationError({"quantity": "Counted quantity cannot be negative"})
        if attrs["adjustment_type"] == "add" and attrs["quantity"] < 1:
            raise serializers.ValidationError({"quantity": "Added quantity must be at least 1"})
        return attrs
