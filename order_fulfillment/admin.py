"""
Django admin configuration for Order Fulfillment.

Orders, unshipped items and changelogs are never deleted here. Line items
can only be edited while the order is pending; after that the status
workflow owns them.
"""

from django.contrib import admin
from .models import Order, OrderItem, OrderStatus, UnshippedItem, OrderChangelog


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['picked_quantity']

    def _is_locked(self, obj):
        return obj is not None and obj.status != OrderStatus.PENDING

    def get_readonly_fields(self, request, obj=None):
        if self._is_locked(obj):
            return ['product', 'quantity', 'picked_quantity']
        return super().get_readonly_fields(request, obj)

    def has_add_permission(self, request, obj=None):
        if self._is_locked(obj):
            return False
        return super().has_add_permission(request, obj)

    def has_delete_permission(self, request, obj=None):
        if self._is_locked(obj):
            return False
        return super().has_delete_permission(request, obj)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_number', 'customer_name', 'status', 'priority', 'percentage_shipped', 'created_at']
    list_filter = ['status', 'priority', 'created_at']
    search_fields = ['order_number', 'customer_name']
    readonly_fields = ['id', 'order_number', 'status', 'created_at', 'updated_at']
    inlines = [OrderItemInline]

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(UnshippedItem)
class UnshippedItemAdmin(admin.ModelAdmin):
    list_display = ['original_order_number', 'customer_name', 'product', 'quantity', 'authorized', 'shipped', 'date']
    list_filter = ['authorized', 'shipped', 'date']
    search_fields = ['original_order_number', 'customer_name', 'product__sku']
    readonly_fields = ['id', 'authorized', 'authorized_by', 'authorized_at', 'date']

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(OrderChangelog)
class OrderChangelogAdmin(admin.ModelAdmin):
    list_display = ['order', 'action', 'user', 'timestamp']
    list_filter = ['action', 'timestamp']
    search_fields = ['order__order_number', 'user__username']
    readonly_fields = ['id', 'order', 'user', 'action', 'timestamp', 'changes', 'previous_values', 'notes']

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
