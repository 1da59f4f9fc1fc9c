"""
Application services built on the kernel.
"""

from catalog.services.catalog_service import CatalogService, CatalogStats

__all__ = [
    "CatalogService",
    "CatalogStats",
]
