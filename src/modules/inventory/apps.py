from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


class InventoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.inventory"
    label = "inventory"

    def ready(self) -> None:
        if settings.INVENTORY_STOCK_UPDATE_MAX_RETRIES < 1:
            raise ImproperlyConfigured(
                "INVENTORY_STOCK_UPDATE_MAX_RETRIES must be at least 1"
            )
        if not 1 <= settings.INVENTORY_SKU_LENGTH <= 30:
            raise ImproperlyConfigured(
                "INVENTORY_SKU_LENGTH must be between 1 and 30"
            )
        if settings.INVENTORY_SKU_GROUP_SIZE < 1:
            raise ImproperlyConfigured(
                "INVENTORY_SKU_GROUP_SIZE must be at least 1"
            )
