"""
Generation of candidate variant combinations from option axes.

Given the axes of a product (e.g. Color: Red, Blue and Size: S, M) the
generator produces one candidate per element of the cartesian product, in a
stable order where the first axis varies slowest:

    Red / S, Red / M, Blue / S, Blue / M

``VariantDraft`` wraps the generator for an authoring session: it keeps the
author's price, quantity and selection edits for every combination whose key
survives an axis change.
"""

import itertools
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Sequence

from django.utils.text import slugify

from apps.catalog.conf import catalog_setting
from apps.catalog.exceptions import OptionAxisError
from .variant_keys import OptionPair, canonical_key

logger = logging.getLogger(__name__)

LABEL_SEPARATOR = ' / '
DEFAULT_PRICE = '0'
EDITABLE_FIELDS = ('price', 'quantity', 'selected', 'sku')


@dataclass
class OptionAxis:
    """A named dimension of variation with its ordered values."""
    name: str
    values: List[str] = field(default_factory=list)


@dataclass
class VariantCombination:
    """One candidate SKU: exactly one value per axis plus authoring fields."""
    key: str
    parts: List[OptionPair]
    label: str
    price: str = DEFAULT_PRICE
    quantity: int = 0
    selected: bool = True
    sku: str = ''

    @property
    def options(self) -> Dict[str, str]:
        return {part.axis_name: part.value for part in self.parts}


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def generate_combinations(axes: Sequence[OptionAxis], base_price=None) -> List[VariantCombination]:
    """
    Build the cartesian product of the axes' values.

    No axes means no combinations (a product without axes is a simple SKU).
    Axes without values are skipped. Every combination starts selected,
    priced at ``base_price`` (or "0") with zero quantity.
    """
    value_lists = [
        [OptionPair(axis.name, value) for value in axis.values]
        for axis in axes
        if axis.values
    ]
    if not value_lists:
        return []

    price = str(base_price) if base_price else DEFAULT_PRICE

    combinations = []
    for parts in itertools.product(*value_lists):
        parts = list(parts)
        combinations.append(VariantCombination(
            key=canonical_key(parts),
            parts=parts,
            label=LABEL_SEPARATOR.join(part.value for part in parts),
            price=price,
        ))

    logger.debug(
        "Generated %d combinations from %d axes",
        len(combinations), len(value_lists)
    )
    return combinations


def merge_combinations(
    previous: Iterable[VariantCombination],
    regenerated: Iterable[VariantCombination],
) -> List[VariantCombination]:
    """
    Carry authoring edits over to a regenerated combination list.

    Combinations whose key existed before keep their price, quantity,
    selection and SKU; new keys keep the generated defaults. The order is
    the order of ``regenerated``.
    """
    prior = {combo.key: combo for combo in previous}
    merged = []
    for combo in regenerated:
        old = prior.get(combo.key)
        if old is not None:
            combo = replace(
                combo,
                price=old.price,
                quantity=old.quantity,
                selected=old.selected,
                sku=old.sku,
            )
        merged.append(combo)
    return merged


def parse_axis_values(text: str) -> List[str]:
    """Parse comma separated values ("S, M, L") into a clean value list."""
    if not text:
        return []
    return _unique(value.strip() for value in text.split(',') if value.strip())


def axis_from_preset(preset) -> OptionAxis:
    """Build an axis from an ``OptionPreset``."""
    values = [str(value).strip() for value in preset.values or []]
    return OptionAxis(name=preset.axis_name, values=_unique(v for v in values if v))


class VariantDraft:
    """
    Variant authoring state for one product.

    Every axis change regenerates the combinations and merges the previous
    edits back in by key.
    """

    def __init__(self, base_price=None, axes=None, max_axes=None):
        self.base_price = base_price
        self.max_axes = max_axes if max_axes is not None else catalog_setting('MAX_OPTION_AXES')
        self.axes: List[OptionAxis] = []
        self.combinations: List[VariantCombination] = []
        for axis in axes or []:
            self.add_axis(axis)

    def _regenerate(self):
        regenerated = generate_combinations(self.axes, self.base_price)
        self.combinations = merge_combinations(self.combinations, regenerated)

    def get_axis(self, name) -> Optional[OptionAxis]:
        """Find an axis by name. Names that slugify alike are the same axis."""
        slug = slugify(name)
        for axis in self.axes:
            if axis.name == name or slugify(axis.name) == slug:
                return axis
        return None

    def add_axis(self, axis: OptionAxis):
        name = (axis.name or '').strip()
        values = _unique(axis.values)

        if not name:
            raise OptionAxisError('Option axis name is required.')
        if not values:
            raise OptionAxisError(f"Option axis '{name}' needs at least one value.")
        if self.get_axis(name) is not None:
            raise OptionAxisError(f"Option axis '{name}' already exists.")
        if len(self.axes) >= self.max_axes:
            raise OptionAxisError(
                f"A product can have at most {self.max_axes} option axes."
            )

        self.axes.append(OptionAxis(name=name, values=values))
        self._regenerate()
        return self.combinations

    def update_axis(self, name, values):
        """Replace the values of an existing axis."""
        axis = self.get_axis(name)
        if axis is None:
            raise OptionAxisError(f"Option axis '{name}' does not exist.")
        values = _unique(values)
        if not values:
            raise OptionAxisError(f"Option axis '{name}' needs at least one value.")

        self.axes[self.axes.index(axis)] = OptionAxis(name=axis.name, values=values)
        self._regenerate()
        return self.combinations

    def remove_axis(self, name):
        axis = self.get_axis(name)
        if axis is None:
            raise OptionAxisError(f"Option axis '{name}' does not exist.")
        self.axes.remove(axis)
        self._regenerate()
        return self.combinations

    def set_base_price(self, price):
        """Change the price used for combinations created from now on."""
        self.base_price = price

    def update_combination(self, key, **fields):
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise TypeError(f"Cannot edit combination fields: {', '.join(sorted(unknown))}")

        for index, combo in enumerate(self.combinations):
            if combo.key == key:
                self.combinations[index] = replace(combo, **fields)
                return self.combinations[index]
        raise KeyError(key)

    def toggle_all(self, selected: bool):
        self.combinations = [replace(combo, selected=selected) for combo in self.combinations]

    def selected_combinations(self) -> List[VariantCombination]:
        return [combo for combo in self.combinations if combo.selected]

    def to_payloads(self) -> List[dict]:
        """Variant payloads for the selected combinations."""
        fallback_price = str(self.base_price) if self.base_price else DEFAULT_PRICE
        return [
            {
                'name': combo.label,
                'sku': combo.sku,
                'price': combo.price or fallback_price,
                'quantity': combo.quantity,
                'options': combo.options,
            }
            for combo in self.selected_combinations()
        ]
