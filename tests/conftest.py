from decimal import Decimal

import pytest
from django.core.cache import cache

from apps.catalog.models import Product
from apps.catalog.services import VariantAuthoringService


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def clear_cache():
    """Resolvers are cached by product id, which the test database reuses."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def product(db):
    return Product.objects.create(
        name='Camiseta',
        base_price=Decimal('49.90'),
    )


@pytest.fixture
def tshirt_variants(product):
    """Red / S, Red / M and Blue / S; Blue / M was never created."""
    return VariantAuthoringService.create_variants(product, [
        {'price': '49.90', 'quantity': 10, 'options': {'Color': 'Red', 'Size': 'S'}},
        {'price': '54.90', 'quantity': 0, 'options': {'Color': 'Red', 'Size': 'M'}},
        {'price': '49.90', 'quantity': 3, 'options': {'Color': 'Blue', 'Size': 'S'}},
    ])
