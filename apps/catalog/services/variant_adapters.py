"""
Translate the stored shapes of a variant into (axis name, value) pairs.

Variant options have been stored in several ways over time. Each function
below reads one of them and returns ``OptionPair`` instances, so any of them
can be passed to ``VariantResolver(variants, get_pairs=...)``:

- ``attribute_option_pairs``: Django ``Variant`` rows joined through
  ``VariantAttribute`` -> ``AttributeOption`` -> ``AttributeType``.
- ``variant_value_pairs``: serialized option/value tables, e.g.
  ``{"product_variant_values": [{"variant_value": {"value": "Red",
  "variant_option": {"name": "Color"}}}]}``
- ``tag_option_pairs``: tag based options, e.g.
  ``{"tag_options": [{"name": "Red", "tag": {"name": "Color"}}]}``
- ``denormalized_pairs``: a plain ``{"options": {"Color": "Red"}}`` mapping
  or an ``{"option_key": "Color:Red|Size:M"}`` string.
"""

from typing import List, Mapping

from .variant_keys import OptionPair, parse_key


def attribute_option_pairs(variant) -> List[OptionPair]:
    """
    Pairs of a Django ``Variant``.

    Iterates ``variantattribute_set.all()`` so a queryset built with
    ``prefetch_related('variantattribute_set__attribute_option__attribute_type')``
    needs no further queries.
    """
    return [
        OptionPair(
            va.attribute_option.attribute_type.name,
            va.attribute_option.value,
        )
        for va in variant.variantattribute_set.all()
    ]


def variant_value_pairs(record: Mapping) -> List[OptionPair]:
    return [
        OptionPair(
            item['variant_value']['variant_option']['name'],
            item['variant_value']['value'],
        )
        for item in record.get('product_variant_values') or []
    ]


def tag_option_pairs(record: Mapping) -> List[OptionPair]:
    return [
        OptionPair(option['tag']['name'], option['name'])
        for option in record.get('tag_options') or []
    ]


def denormalized_pairs(record: Mapping) -> List[OptionPair]:
    """Pairs from an ``options`` mapping, or from an ``option_key`` string."""
    options = record.get('options')
    if options is not None:
        return [OptionPair(axis_name, str(value)) for axis_name, value in options.items()]
    return parse_key(record.get('option_key') or '')
