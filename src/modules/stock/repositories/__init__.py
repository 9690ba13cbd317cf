"""Stock repositories package."""

from modules.stock.repositories.django_repository import StockDjangoRepository
from modules.stock.repositories.interfaces import IStockRepository

__all__ = ["IStockRepository", "StockDjangoRepository"]
