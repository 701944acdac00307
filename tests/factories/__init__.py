"""
Test data factories for the vacuum packaging controller.

Usage:
    from tests.factories import create_product, create_settings

    product = create_product(moisture=85.0)
    settings = create_settings(vacuum_level=VacuumLevel.ULTRA)
"""

from .product_factory import (
    ProductFactory,
    create_product,
    create_settings,
)

__all__ = [
    "ProductFactory",
    "create_product",
    "create_settings",
]
