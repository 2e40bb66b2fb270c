from .flavor_catalog_collector import FlavorCatalogCollector
from .inventory_collector import InventoryCollector

__all__ = [
    "FlavorCatalogCollector",
    "InventoryCollector",
]
