import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
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
                ("owner_id", models.UUIDField(db_index=True, editable=False)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "sku",
                    models.CharField(editable=False, max_length=64, unique=True),
                ),
            ],
            options={
                "db_table": "products",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(
                        fields=["owner_id", "id"], name="products_owner_idx"
                    )
                ],
            },
        ),
    ]
