from .variant_keys import OptionPair, canonical_key, pairs_from_selection, parse_key
from .variant_combinations import (
    OptionAxis,
    VariantCombination,
    VariantDraft,
    axis_from_preset,
    generate_combinations,
    merge_combinations,
    parse_axis_values,
)
from .variant_resolver import VariantResolver
from .variant_authoring import VariantAuthoringService
from .variant_navigation import VariantNavigationService

__all__ = [
    'OptionPair',
    'canonical_key',
    'pairs_from_selection',
    'parse_key',
    'OptionAxis',
    'VariantCombination',
    'VariantDraft',
    'axis_from_preset',
    'generate_combinations',
    'merge_combinations',
    'parse_axis_values',
    'VariantResolver',
    'VariantAuthoringService',
    'VariantNavigationService',
]
