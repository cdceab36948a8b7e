"""Data handling module for the product catalog"""

from .catalog import Catalog, ProductRecord
from .catalog_loader import CatalogLoader

__all__ = ['Catalog', 'ProductRecord', 'CatalogLoader']
