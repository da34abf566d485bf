import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("order_fulfillment", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="orderchangelog",
            name="order",
            field=models.ForeignKey(
                on_delete=django.db.models.deletion.PROTECT,
                related_name="changelogs",
                to="order_fulfillment.order",
            ),
        ),
        migrations.AlterField(
            model_name="unshippeditem",
            name="order",
            field=models.ForeignKey(
                help_text="Order the shortfall originated from",
                on_delete=django.db.models.deletion.PROTECT,
                related_name="unshipped_items",
                to="order_fulfillment.order",
            ),
        ),
    ]
