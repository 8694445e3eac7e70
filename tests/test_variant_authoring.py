from decimal import Decimal
from unittest import mock

import pytest
from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from apps.catalog.exceptions import DuplicateVariantError
from apps.catalog.models import AttributeOption, AttributeType, Product, Variant, VariantAttribute
from apps.catalog.services import OptionAxis, VariantAuthoringService, VariantDraft
from apps.catalog.services.variant_adapters import denormalized_pairs
from apps.catalog.services.variant_authoring import generate_sku
from apps.catalog.services.variant_keys import OptionPair
from apps.catalog.services.variant_resolver import VariantResolver


pytestmark = pytest.mark.django_db


class TestSaveDraft:

    @pytest.fixture
    def draft(self):
        draft = VariantDraft(base_price='49.90', axes=[
            OptionAxis('Color', ['Red', 'Blue']),
            OptionAxis('Size', ['S', 'M']),
        ])
        draft.update_combination('Color:Red|Size:S', quantity=10, price='59.90')
        draft.update_combination('Color:Blue|Size:M', selected=False)
        return draft

    def test_only_selected_combinations_are_created(self, product, draft):
        created = VariantAuthoringService.save_draft(product, draft)

        assert [v.name for v in created] == ['Red / S', 'Red / M', 'Blue / S']
        assert product.variants.count() == 3
        assert VariantAttribute.objects.filter(variant__product=product).count() == 6

    def test_prices_and_stock(self, product, draft):
        red_s, red_m, _ = VariantAuthoringService.save_draft(product, draft)

        assert red_s.sell_price == Decimal('59.90')
        assert red_s.stock_quantity == 10
        assert red_m.sell_price == Decimal('49.90')
        assert red_m.stock_quantity == 0

    def test_axes_and_options_are_created_per_product(self, product, draft):
        VariantAuthoringService.save_draft(product, draft)

        assert list(AttributeType.objects.values_list('name', flat=True)) == ['Color', 'Size']
        values = set(AttributeOption.objects.filter(product=product).values_list('value', flat=True))
        assert values == {'Red', 'Blue', 'S', 'M'}

    def test_skus_are_generated(self, product, draft):
        created = VariantAuthoringService.save_draft(product, draft)
        assert [v.sku for v in created] == ['CAMISETA-RED-S', 'CAMISETA-RED-M', 'CAMISETA-BLUE-S']

    def test_metadata_is_denormalized(self, product, draft):
        VariantAuthoringService.save_draft(product, draft)
        product.refresh_from_db()

        assert product.metadata_attributes == [
            {'name': 'Color', 'values': ['Red', 'Blue']},
            {'name': 'Size', 'values': ['S', 'M']},
        ]
        assert [row['option_key'] for row in product.metadata_variants] == [
            'Color:Red|Size:S',
            'Color:Red|Size:M',
            'Color:Blue|Size:S',
        ]

        # The denormalized copy resolves like the relational rows
        resolver = VariantResolver(product.metadata_variants, get_pairs=denormalized_pairs)
        assert resolver.resolve({'Color': 'Red', 'Size': 'M'})['sku'] == 'CAMISETA-RED-M'

    def test_history_is_recorded(self, product, draft):
        red_s = VariantAuthoringService.save_draft(product, draft)[0]
        assert red_s.history.count() == 1


class TestCreateVariants:

    def test_explicit_sku_and_name_are_kept(self, product):
        variant, = VariantAuthoringService.create_variants(product, [
            {'sku': 'TS-001', 'name': 'Vermelha P', 'price': '10', 'options': {'Color': 'Red'}},
        ])
        assert (variant.sku, variant.name) == ('TS-001', 'Vermelha P')

    def test_missing_price_uses_product_base_price(self, product):
        variant, = VariantAuthoringService.create_variants(product, [
            {'options': {'Color': 'Red'}},
        ])
        assert variant.sell_price == Decimal('49.90')

    def test_empty_payload_list(self, product):
        assert VariantAuthoringService.create_variants(product, []) == []

    def test_options_are_required(self, product):
        with pytest.raises(ValidationError):
            VariantAuthoringService.create_variants(product, [{'price': '10', 'options': {}}])

    @pytest.mark.parametrize('price', ['abc', '-1', 'NaN', 'sNaN', 'Infinity', '-Infinity'])
    def test_invalid_price(self, product, price):
        with pytest.raises(ValidationError) as excinfo:
            VariantAuthoringService.create_variants(product, [
                {'price': price, 'options': {'Color': 'Red'}},
            ])

        assert excinfo.value.code == 'invalid_price'
        assert not Variant.objects.exists()

    def test_axes_with_the_same_slug_are_rejected(self, product):
        with pytest.raises(ValidationError) as excinfo:
            VariantAuthoringService.create_variants(product, [
                {'price': '10', 'options': {'Color': 'Red', 'color': 'Blue'}},
                {'price': '10', 'options': {'Color': 'Green', 'color': 'Blue'}},
            ])

        assert excinfo.value.code == 'duplicate_axis'
        assert not Variant.objects.exists()
        assert not VariantAttribute.objects.exists()

    def test_stored_keys_match_metadata(self, product):
        VariantAuthoringService.create_variants(product, [
            {'price': '10', 'options': {'Color': 'Red', 'Size': 'S'}},
            {'price': '10', 'options': {'Color': 'Red', 'Size': 'M'}},
        ])
        product.refresh_from_db()

        stored = sorted(v.get_option_key() for v in product.variants.all())
        denormalized = sorted(row['option_key'] for row in product.metadata_variants)
        assert stored == denormalized == ['Color:Red|Size:M', 'Color:Red|Size:S']

    def test_duplicate_within_payloads(self, product):
        with pytest.raises(DuplicateVariantError) as excinfo:
            VariantAuthoringService.create_variants(product, [
                {'price': '10', 'options': {'Color': 'Red', 'Size': 'S'}},
                {'price': '10', 'options': {'Size': 'S', 'Color': 'Red'}},
            ])

        assert excinfo.value.key == 'Color:Red|Size:S'
        assert not Variant.objects.exists()
        assert not AttributeType.objects.exists()

    def test_duplicate_of_existing_variant_creates_nothing(self, product, tshirt_variants):
        with pytest.raises(DuplicateVariantError):
            VariantAuthoringService.create_variants(product, [
                {'price': '10', 'options': {'Color': 'Blue', 'Size': 'M'}},
                {'price': '10', 'options': {'Color': 'Red', 'Size': 'S'}},
            ])

        assert product.variants.count() == 3
        assert not product.variants.filter(name='Blue / M').exists()

    def test_adds_to_existing_variants(self, product, tshirt_variants):
        VariantAuthoringService.create_variants(product, [
            {'price': '10', 'options': {'Color': 'Blue', 'Size': 'M'}},
        ])
        product.refresh_from_db()

        assert product.variants.count() == 4
        assert len(product.metadata_variants) == 4


class TestGenerateSku:

    def test_collision_gets_suffix(self, product):
        pairs = [OptionPair('Color', 'Red')]
        Variant.objects.create(product=product, sku='CAMISETA-RED', sell_price=Decimal('1'))

        assert generate_sku(product, pairs) == 'CAMISETA-RED-2'

    def test_values_are_slugified(self, product):
        pairs = [OptionPair('Cor', 'Azul Marinho'), OptionPair('Tamanho', 'GG')]
        assert generate_sku(product, pairs) == 'CAMISETA-AZUL-MARINHO-GG'


class TestConcurrentAuthoring:

    def test_product_row_is_locked_before_reading_existing_variants(self, product, tshirt_variants):
        calls = []
        original_lock = QuerySet.select_for_update
        original_key = Variant.get_option_key

        def lock(queryset, *args, **kwargs):
            calls.append(('lock', queryset.model))
            return original_lock(queryset, *args, **kwargs)

        def option_key(variant):
            calls.append(('read', variant.pk))
            return original_key(variant)

        with mock.patch.object(QuerySet, 'select_for_update', autospec=True, side_effect=lock), \
                mock.patch.object(Variant, 'get_option_key', autospec=True, side_effect=option_key):
            VariantAuthoringService.create_variants(product, [
                {'price': '10', 'options': {'Color': 'Blue', 'Size': 'M'}},
            ])

        assert calls[0] == ('lock', Product)
        assert {pk for kind, pk in calls[1:]} == {v.pk for v in tshirt_variants}
