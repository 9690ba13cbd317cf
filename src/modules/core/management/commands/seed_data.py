from __future__ import annotations

import random
import uuid

from django.core.management.base import BaseCommand

from modules.inventory.dtos import CreateProductDTO
from modules.inventory.services import InventoryService
from modules.products.repositories import ProductDjangoRepository
from modules.stock.repositories import StockDjangoRepository

CATALOG = [
    ("Monitor 27\"", "Electronics"),
    ("Mechanical Keyboard", "Electronics"),
    ("Gaming Mouse", "Electronics"),
    ("Headset", "Electronics"),
    ("Office Desk", "Furniture"),
    ("Ergonomic Chair", "Furniture"),
    ("Bookshelf", "Furniture"),
    ("A4 Paper", "Office"),
    ("Blue Pen", "Office"),
    ("Notebook Stand", "Office"),
]


class Command(BaseCommand):
    help = "Seed the database with products and stock for development owners."

    def add_arguments(self, parser):
        parser.add_argument(
            "--owners",
            type=int,
            default=2,
            help="Number of owners to create products for.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        service = InventoryService(
            product_repository=ProductDjangoRepository(),
            stock_repository=StockDjangoRepository(),
        )

        created = 0
        for _ in range(options["owners"]):
            owner_id = uuid.uuid4()
            for name, description in CATALOG:
                service.create_product(
                    owner_id,
                    CreateProductDTO(
                        name=name,
                        description=description,
                        quantity=random.randint(10, 200),
                    ),
                )
                created += 1
            self.stdout.write(f"Owner {owner_id}: {len(CATALOG)} products")

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: owners={options['owners']}, products={created}"
            )
        )
