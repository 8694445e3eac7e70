"""
Catalog models for ecommerce with dynamic product variants.

Model Hierarchy:
- Product: Base product (e.g., "Camiseta Básica")
- AttributeType: Option axes (Color, Size, Length)
- AttributeOption: Values for each axis, per product (Azul, M, 230m)
- Variant: Individual SKU with price and stock
- OptionPreset: Reusable axis definitions with suggested values
"""

from .product import Product
from .attribute import AttributeType, AttributeOption
from .variant import Variant, VariantAttribute
from .option_preset import OptionPreset

__all__ = [
    'Product',
    'AttributeType',
    'AttributeOption',
    'Variant',
    'VariantAttribute',
    'OptionPreset',
]
