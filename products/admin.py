from django.contrib import admin
from .models import Product, InventoryChange


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["name", "sku", "current_stock", "min_stock_level", "is_active", "created_at"]
    list_filter = ["is_active", "created_at"]
    search_fields = ["name", "sku", "description"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(InventoryChange)
class InventoryChangeAdmin(admin.ModelAdmin):
    list_display = ["product", "change_type", "previous_quantity", "new_quantity", "user", "created_at"]
    list_filter = ["change_type", "created_at"]
    search_fields = ["product__name", "product__sku", "reference"]
    readonly_fields = [
        "product", "user", "change_type", "previous_quantity", "new_quantity",
        "quantity_changed", "reference", "notes", "created_at",
    ]
