import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Stock",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner_id", models.UUIDField(editable=False)),
                ("product_id", models.UUIDField(editable=False)),
                ("quantity", models.IntegerField(default=0)),
                ("version", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "stocks",
                "ordering": ["created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("owner_id", "product_id"),
                        name="stocks_owner_product_unique",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(quantity__gte=0),
                        name="stocks_quantity_non_negative",
                    ),
                ],
            },
        ),
    ]
