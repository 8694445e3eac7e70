"""
Service for storefront navigation between a product's variants.
Availability is INFERRED from the existing variants, not configured manually.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from django.core.cache import cache

from apps.catalog.conf import catalog_setting
from apps.catalog.models import AttributeOption, Product, Variant
from .variant_resolver import VariantResolver

logger = logging.getLogger(__name__)

RESOLVER_CACHE_KEY = 'catalog:variant-resolver:{product_id}'


class VariantNavigationService:
    """
    Resolve option selections to variants for a product page.
    Resolvers are cached per product and dropped whenever its variants change.

    Invalidation hangs on model signals, so ``QuerySet.update()`` and
    ``bulk_create()`` on variants or options do not reach it. Callers doing
    bulk writes must call ``invalidate_resolver`` for each product touched,
    otherwise the cached resolver is served until ``RESOLVER_CACHE_TIMEOUT``.
    """

    @staticmethod
    def build_resolver(product: Product) -> VariantResolver:
        variants = Variant.objects.filter(
            product=product,
            is_active=True
        ).prefetch_related(
            'variantattribute_set__attribute_option__attribute_type'
        )
        return VariantResolver(list(variants))

    @staticmethod
    def get_resolver(product: Product) -> VariantResolver:
        cache_key = RESOLVER_CACHE_KEY.format(product_id=product.pk)
        resolver = cache.get(cache_key)
        if resolver is None:
            resolver = VariantNavigationService.build_resolver(product)
            cache.set(cache_key, resolver, catalog_setting('RESOLVER_CACHE_TIMEOUT'))
            logger.debug(
                "Built variant resolver for product %s with %d keys",
                product.pk, len(resolver)
            )
        return resolver

    @staticmethod
    def invalidate_resolver(product_id):
        cache.delete(RESOLVER_CACHE_KEY.format(product_id=product_id))

    @staticmethod
    def find_variant(product: Product, selections: Mapping[str, str]) -> Optional[Variant]:
        """
        Return the active variant matching exactly the given selections.

        Args:
            product: The product to search within
            selections: Dict of {axis name: option value}

        Returns:
            The matching Variant, or None when that combination was never
            created as a SKU
        """
        return VariantNavigationService.get_resolver(product).resolve(selections)

    @staticmethod
    def get_available_options(
        product: Product,
        selections: Mapping[str, str]
    ) -> Dict[str, Dict[str, Any]]:
        """
        Get the available options for each axis, given current selections.

        An option is available when at least one active variant has it
        together with every selection made on the other axes.

        Example:
            selections = {'Cor': 'Azul'}
            -> 'tamanho' lists only the sizes that exist in Azul

        Returns:
            Dict with attribute slugs as keys, in display order
        """
        resolver = VariantNavigationService.get_resolver(product)
        variant_options = [variant.get_options_dict() for variant in resolver.values()]

        product_options = AttributeOption.objects.filter(
            product=product
        ).select_related('attribute_type').order_by(
            'attribute_type__display_order', 'attribute_type__name', 'display_order', 'value'
        )

        result = {}
        reachable = {}
        for option in product_options:
            attr_type = option.attribute_type
            if attr_type.slug not in result:
                other_selections = {
                    k: v for k, v in selections.items()
                    if k != attr_type.name
                }
                reachable[attr_type.slug] = {
                    options.get(attr_type.name)
                    for options in variant_options
                    if all(options.get(k) == v for k, v in other_selections.items())
                }
                result[attr_type.slug] = {
                    'name': attr_type.name,
                    'slug': attr_type.slug,
                    'options': [],
                }

            if option.value in reachable[attr_type.slug]:
                result[attr_type.slug]['options'].append({
                    'id': option.id,
                    'value': option.value,
                    'display_value': option.get_display_value(),
                    'color_hex': option.color_hex,
                    'is_selected': option.value == selections.get(attr_type.name),
                })
        return result

    @staticmethod
    def find_match(product: Product, selections: Mapping[str, str]) -> Dict[str, Any]:
        """
        Find the variant for the selections plus navigation data.

        Returns dict with:
        - type: 'variant' or 'none'
        - variant data when found
        - available_options: what options are available for further navigation
        """
        variant = VariantNavigationService.find_variant(product, selections)
        available_options = VariantNavigationService.get_available_options(
            product, selections
        )

        if variant is None:
            return {
                'type': 'none',
                'message': 'Combination unavailable',
                'available_options': available_options,
            }

        return {
            'type': 'variant',
            'id': variant.id,
            'sku': variant.sku,
            'name': variant.name,
            'product_slug': product.slug,
            'sell_price': str(variant.sell_price),
            'stock_quantity': variant.stock_quantity,
            'is_in_stock': variant.is_in_stock,
            'options': variant.get_options_dict(),
            'available_options': available_options,
        }
