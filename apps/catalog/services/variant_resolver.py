"""
O(1) lookup of a product's variant from the selected option values.
"""

import logging
from typing import Callable, Dict, Generic, Iterable, KeysView, Mapping, Optional, TypeVar, ValuesView

from .variant_keys import OptionPair, canonical_key, pairs_from_selection

logger = logging.getLogger(__name__)

V = TypeVar('V')


def _default_pairs(variant) -> Iterable[OptionPair]:
    return variant.get_option_pairs()


class VariantResolver(Generic[V]):
    """
    Read-only index of a product's variants keyed by their canonical key.

    ``get_pairs`` turns one persisted variant into its (axis name, value)
    pairs; see ``variant_adapters`` for the supported shapes. Variants that
    share a key are not rejected here: the last one wins. Build a new
    resolver when the variants change.

    Example:
        resolver = VariantResolver(product.variants.all())
        resolver.resolve({'Color': 'Red', 'Size': 'M'})  # Variant or None
    """

    def __init__(self, variants: Iterable[V], get_pairs: Optional[Callable[[V], Iterable[OptionPair]]] = None):
        get_pairs = get_pairs or _default_pairs
        self._index: Dict[str, V] = {}

        for variant in variants:
            key = canonical_key(get_pairs(variant))
            if key in self._index:
                logger.debug("Variant key %r indexed twice, keeping the last one", key)
            self._index[key] = variant

    def __len__(self):
        return len(self._index)

    def __contains__(self, selected_options):
        return self.resolve(selected_options) is not None

    def keys(self) -> KeysView[str]:
        return self._index.keys()

    def values(self) -> ValuesView[V]:
        return self._index.values()

    def resolve(self, selected_options: Mapping[str, str]) -> Optional[V]:
        """
        Return the variant matching exactly ``selected_options``, or None.

        A selection with no matching SKU is an expected case and returns
        None; passing None instead of a mapping raises TypeError.
        """
        key = canonical_key(pairs_from_selection(selected_options))
        return self._index.get(key)
