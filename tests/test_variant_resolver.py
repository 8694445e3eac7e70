import pytest

from apps.catalog.services.variant_adapters import denormalized_pairs
from apps.catalog.services.variant_combinations import OptionAxis, generate_combinations
from apps.catalog.services.variant_resolver import VariantResolver


def make_variant(variant_id, **options):
    return {'id': variant_id, 'options': options}


class PersistedVariant:
    def __init__(self, variant_id, pairs):
        self.id = variant_id
        self._pairs = pairs

    def get_option_pairs(self):
        return self._pairs


class TestVariantResolver:

    @pytest.fixture
    def resolver(self):
        return VariantResolver(
            [
                make_variant('V1', Color='Red', Size='S'),
                make_variant('V2', Color='Red', Size='M'),
            ],
            get_pairs=denormalized_pairs,
        )

    def test_resolves_exact_selection(self, resolver):
        assert resolver.resolve({'Color': 'Red', 'Size': 'S'})['id'] == 'V1'
        assert resolver.resolve({'Size': 'M', 'Color': 'Red'})['id'] == 'V2'

    def test_unknown_combination_is_not_found(self, resolver):
        assert resolver.resolve({'Color': 'Blue', 'Size': 'S'}) is None

    def test_partial_selection_is_not_found(self, resolver):
        assert resolver.resolve({'Color': 'Red'}) is None

    def test_extra_axis_is_not_found(self, resolver):
        assert resolver.resolve({'Color': 'Red', 'Size': 'S', 'Fit': 'Slim'}) is None

    def test_none_selection_raises(self, resolver):
        with pytest.raises(TypeError):
            resolver.resolve(None)

    def test_membership_and_size(self, resolver):
        assert len(resolver) == 2
        assert {'Color': 'Red', 'Size': 'M'} in resolver
        assert {'Color': 'Blue', 'Size': 'M'} not in resolver
        assert sorted(resolver.keys()) == ['Color:Red|Size:M', 'Color:Red|Size:S']

    def test_duplicate_keys_last_write_wins(self):
        resolver = VariantResolver(
            [
                make_variant('first', Color='Red'),
                make_variant('second', Color='Red'),
            ],
            get_pairs=denormalized_pairs,
        )
        assert len(resolver) == 1
        assert resolver.resolve({'Color': 'Red'})['id'] == 'second'

    def test_default_uses_get_option_pairs(self):
        variant = PersistedVariant('V1', [('Size', 'S'), ('Color', 'Red')])
        resolver = VariantResolver([variant])
        assert resolver.resolve({'Color': 'Red', 'Size': 'S'}) is variant

    def test_empty_variant_list(self):
        resolver = VariantResolver([])
        assert len(resolver) == 0
        assert resolver.resolve({'Color': 'Red'}) is None

    def test_every_generated_combination_round_trips(self):
        axes = [
            OptionAxis('Color', ['Red', 'Blue', 'Green']),
            OptionAxis('Size', ['S', 'M']),
            OptionAxis('Fit', ['Slim', 'Regular']),
        ]
        combos = generate_combinations(axes, '10')
        persisted = [
            PersistedVariant(index, list(reversed(combo.parts)))
            for index, combo in enumerate(combos)
        ]

        resolver = VariantResolver(persisted)

        for index, combo in enumerate(combos):
            assert resolver.resolve(combo.options).id == index
