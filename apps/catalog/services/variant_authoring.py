"""
Write path for authored variants.

Turns the payloads of a ``VariantDraft`` into ``Variant`` rows with their
``VariantAttribute`` links. This is where the one-SKU-per-option-assignment
rule is enforced; the resolver only reads.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils.text import slugify

from apps.catalog.exceptions import DuplicateVariantError
from apps.catalog.models import (
    AttributeOption,
    AttributeType,
    Product,
    Variant,
    VariantAttribute,
)
from .variant_combinations import LABEL_SEPARATOR
from .variant_keys import OptionPair, canonical_key

logger = logging.getLogger(__name__)


def generate_sku(product, pairs):
    """
    Build a SKU like ``CAMISETA-AZUL-M`` that is not used yet.
    A numeric suffix is appended on collision.
    """
    parts = [slugify(product.slug or product.name)]
    parts.extend(slugify(pair.value) for pair in pairs)
    base = '-'.join(part for part in parts if part).upper()[:90]

    sku = base
    suffix = 2
    while Variant.objects.filter(sku=sku).exists():
        sku = f"{base}-{suffix}"
        suffix += 1
    return sku


def _parse_price(value):
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Invalid price: {value!r}", code='invalid_price')
    if not price.is_finite() or price < 0:
        raise ValidationError(f"Price must be a finite amount >= 0, got {value!r}", code='invalid_price')
    return price


class VariantAuthoringService:
    """Create variants for a product from authored payloads."""

    @staticmethod
    def _get_attribute_type(axis_name, position, type_cache):
        if axis_name not in type_cache:
            attr_type, created = AttributeType.objects.get_or_create(
                slug=slugify(axis_name),
                defaults={'name': axis_name, 'display_order': position}
            )
            if created:
                logger.info("Created attribute type %r", axis_name)
            elif attr_type.name != axis_name:
                logger.warning(
                    "Axis %r stored under existing attribute type %r",
                    axis_name, attr_type.name
                )
            type_cache[axis_name] = attr_type
        return type_cache[axis_name]

    @staticmethod
    def _get_option(product, attr_type, value, option_cache):
        cache_key = (attr_type.pk, value)
        if cache_key not in option_cache:
            option, _ = AttributeOption.objects.get_or_create(
                attribute_type=attr_type,
                product=product,
                value=value,
                defaults={'display_value': value}
            )
            option_cache[cache_key] = option
        return option_cache[cache_key]

    @classmethod
    def create_variants(cls, product, payloads, axes=None):
        """
        Create one variant per payload, all or nothing.

        Each payload is ``{name, sku, price, quantity, options}`` where
        ``options`` maps axis name to value in axis order. Raises
        ``DuplicateVariantError`` if two payloads, or a payload and an
        existing variant of the product, share an option assignment.
        """
        payloads = list(payloads)
        if not payloads:
            return []

        created = []
        metadata_rows = []
        type_cache = {}
        option_cache = {}

        with transaction.atomic():
            # Serializes authoring of one product until commit
            Product.objects.select_for_update().filter(pk=product.pk).first()
            existing_keys = {
                variant.get_option_key()
                for variant in product.variants.prefetch_related(
                    'variantattribute_set__attribute_option__attribute_type'
                )
            }

            for payload in payloads:
                options = payload.get('options') or {}
                if not options:
                    raise ValidationError(
                        'A variant needs at least one option value.',
                        code='missing_options'
                    )

                attribute_options = []
                seen_types = {}
                for position, (axis_name, value) in enumerate(options.items()):
                    attr_type = cls._get_attribute_type(axis_name, position, type_cache)
                    # A variant holds one option per attribute type
                    if attr_type.pk in seen_types:
                        raise ValidationError(
                            f"Axes {seen_types[attr_type.pk]!r} and {axis_name!r} "
                            f"both map to attribute type {attr_type.name!r}.",
                            code='duplicate_axis'
                        )
                    seen_types[attr_type.pk] = axis_name
                    attribute_options.append(
                        cls._get_option(product, attr_type, str(value), option_cache)
                    )

                pairs = [
                    OptionPair(option.attribute_type.name, option.value)
                    for option in attribute_options
                ]
                key = canonical_key(pairs)
                if key in existing_keys:
                    logger.warning(
                        "Rejected duplicate variant %r for product %s", key, product.pk
                    )
                    raise DuplicateVariantError(
                        f"Product '{product.name}' already has a variant for {key}.",
                        key=key,
                    )
                existing_keys.add(key)

                label = payload.get('name') or LABEL_SEPARATOR.join(pair.value for pair in pairs)
                variant = Variant.objects.create(
                    product=product,
                    sku=payload.get('sku') or generate_sku(product, pairs),
                    name=label,
                    sell_price=_parse_price(payload.get('price') or product.base_price),
                    stock_quantity=int(payload.get('quantity') or 0),
                )
                for option in attribute_options:
                    VariantAttribute.objects.create(variant=variant, attribute_option=option)

                created.append(variant)
                metadata_rows.append({
                    'sku': variant.sku,
                    'name': variant.name,
                    'price': str(variant.sell_price),
                    'quantity': variant.stock_quantity,
                    'options': {pair.axis_name: pair.value for pair in pairs},
                    'option_key': key,
                })

            product.metadata_variants = (product.metadata_variants or []) + metadata_rows
            update_fields = ['metadata_variants']
            if axes is not None:
                product.metadata_attributes = [
                    {'name': axis.name, 'values': list(axis.values)} for axis in axes
                ]
                update_fields.append('metadata_attributes')
            product.save(update_fields=update_fields)

        logger.info("Created %d variants for product %s", len(created), product.pk)
        return created

    @classmethod
    def save_draft(cls, product, draft):
        """Persist the selected combinations of a ``VariantDraft``."""
        return cls.create_variants(product, draft.to_payloads(), axes=draft.axes)
