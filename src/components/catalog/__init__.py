"""
Catalog component - Product categories, products and distributor catalogs.
"""

from ._impl import ProductCatalogService, ProductCategoryService, ProductService

__all__ = ["ProductCategoryService", "ProductService", "ProductCatalogService"]
