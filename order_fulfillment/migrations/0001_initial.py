import django.core.serializers.json
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("products", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "order_number",
                    models.CharField(
                        blank=True,
                        help_text="Unique order identifier (auto-generated from the id)",
                        max_length=50,
                        null=True,
                        unique=True,
                    ),
                ),
                ("customer_name", models.CharField(db_index=True, help_text="Customer the order is for", max_length=200)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("picked", "Picked"),
                            ("shipped", "Shipped"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        help_text="Current order status in the fulfillment workflow",
                        max_length=20,
                    ),
                ),
                (
                    "priority",
                    models.CharField(
                        choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("urgent", "Urgent")],
                        default="medium",
                        help_text="Order priority level",
                        max_length=10,
                    ),
                ),
                ("order_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("estimated_shipping_date", models.DateTimeField(blank=True, null=True)),
                ("actual_shipping_date", models.DateTimeField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, help_text="Order notes or special instructions")),
                ("partial_fulfillment_approved", models.BooleanField(default=False)),
                ("partial_fulfillment_approved_at", models.DateTimeField(blank=True, null=True)),
                (
                    "percentage_shipped",
                    models.PositiveSmallIntegerField(default=0, help_text="Share of requested quantity actually picked, 0-100"),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        help_text="User who created the order",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "partial_fulfillment_approved_by",
                    models.ForeignKey(
                        blank=True,
                        help_text="Manager/admin who approved shipping with unshipped items",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="approved_partial_orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "updated_by",
                    models.ForeignKey(
                        help_text="User who last updated the order",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="updated_orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status", "priority"], name="order_fulf_status_4e1a2c_idx"),
                    models.Index(fields=["customer_name", "status"], name="order_fulf_custome_9b7d3f_idx"),
                    models.Index(fields=["created_at"], name="order_fulf_created_a51c08_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(help_text="Requested quantity")),
                (
                    "picked_quantity",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Actual quantity picked; empty until the pick list is completed",
                        null=True,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        help_text="Order this item belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="order_fulfillment.order",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="order_items",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "ordering": ["order", "id"],
            },
        ),
        migrations.CreateModel(
            name="UnshippedItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(help_text="Shortfall quantity")),
                ("customer_name", models.CharField(db_index=True, max_length=200)),
                ("customer_id", models.CharField(blank=True, max_length=200)),
                ("original_order_number", models.CharField(max_length=50)),
                ("date", models.DateTimeField(default=django.utils.timezone.now)),
                ("shipped", models.BooleanField(default=False)),
                ("shipped_at", models.DateTimeField(blank=True, null=True)),
                ("authorized", models.BooleanField(default=False)),
                ("authorized_at", models.DateTimeField(blank=True, null=True)),
                ("notes", models.TextField(blank=True)),
                (
                    "authorized_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="authorized_unshipped_items",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        help_text="Order the shortfall originated from",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="unshipped_items",
                        to="order_fulfillment.order",
                    ),
                ),
                (
                    "order_item",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="unshipped_items",
                        to="order_fulfillment.orderitem",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="unshipped_items",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [
                    models.Index(fields=["authorized", "shipped"], name="order_fulf_authori_62c0de_idx"),
                    models.Index(fields=["order", "shipped"], name="order_fulf_order_i_1f3b97_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderChangelog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("create", "Create"),
                            ("update", "Update"),
                            ("status_change", "Status change"),
                            ("unshipped_authorization", "Unshipped authorization"),
                            ("partial_approval", "Partial approval"),
                        ],
                        max_length=30,
                    ),
                ),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "changes",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        encoder=django.core.serializers.json.DjangoJSONEncoder,
                        help_text="New values after the change",
                    ),
                ),
                (
                    "previous_values",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        encoder=django.core.serializers.json.DjangoJSONEncoder,
                        help_text="Previous values before the change",
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="changelogs",
                        to="order_fulfillment.order",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User who performed the action",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_changelogs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-timestamp", "-id"],
                "indexes": [
                    models.Index(fields=["order", "-timestamp"], name="order_fulf_order_i_8d2e45_idx"),
                    models.Index(fields=["action", "-timestamp"], name="order_fulf_action_0c6f13_idx"),
                ],
            },
        ),
    ]
