from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="inventorychange",
            name="change_type",
            field=models.CharField(
                choices=[
                    ("order_fulfillment", "Order Fulfillment"),
                    ("order_cancellation", "Order Cancellation"),
                    ("manual_adjustment", "Manual Adjustment"),
                    ("stock_replenishment", "Stock Replenishment"),
                ],
                max_length=30,
            ),
        ),
    ]
