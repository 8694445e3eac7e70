from rest_framework import serializers

from apps.catalog.models import (
    AttributeOption,
    AttributeType,
    OptionPreset,
    Variant,
)
from apps.catalog.services import OptionAxis, parse_axis_values


# =============================================================================
# Attribute Serializers
# =============================================================================

class AttributeOptionSerializer(serializers.ModelSerializer):
    attribute_type_name = serializers.CharField(
        source='attribute_type.name', read_only=True
    )
    attribute_type_slug = serializers.CharField(
        source='attribute_type.slug', read_only=True
    )

    class Meta:
        model = AttributeOption
        fields = [
            'id', 'attribute_type', 'attribute_type_name', 'attribute_type_slug',
            'value', 'display_value', 'color_hex', 'display_order'
        ]


class AttributeTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = AttributeType
        fields = ['id', 'name', 'slug', 'display_order']


class OptionPresetSerializer(serializers.ModelSerializer):
    class Meta:
        model = OptionPreset
        fields = ['id', 'name', 'axis_name', 'values']


# =============================================================================
# Option Axes and Combinations
# =============================================================================

class OptionAxisSerializer(serializers.Serializer):
    """
    An option axis as entered by the author.
    ``values`` accepts a list or a comma separated string ("S, M, L").
    """
    name = serializers.CharField(max_length=100)
    values = serializers.JSONField()

    def validate_values(self, value):
        if isinstance(value, str):
            values = parse_axis_values(value)
        elif isinstance(value, list):
            values = []
            for item in value:
                item = str(item).strip()
                if item and item not in values:
                    values.append(item)
        else:
            raise serializers.ValidationError('Expected a list or a comma separated string.')

        if not values:
            raise serializers.ValidationError('At least one value is required.')
        return values

    def to_axis(self):
        return OptionAxis(
            name=self.validated_data['name'],
            values=self.validated_data['values'],
        )


class GenerateCombinationsSerializer(serializers.Serializer):
    axes = OptionAxisSerializer(many=True)
    base_price = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_axes(self, value):
        names = [axis['name'] for axis in value]
        if len(names) != len(set(names)):
            raise serializers.ValidationError('Axis names must be unique.')
        return value

    def get_axes(self):
        return [
            OptionAxis(name=axis['name'], values=axis['values'])
            for axis in self.validated_data['axes']
        ]


class CombinationPartSerializer(serializers.Serializer):
    axisName = serializers.CharField(source='axis_name')
    value = serializers.CharField()


class VariantCombinationSerializer(serializers.Serializer):
    """Read-only view of a ``VariantCombination``."""
    key = serializers.CharField()
    parts = CombinationPartSerializer(many=True)
    label = serializers.CharField()
    price = serializers.CharField()
    quantity = serializers.IntegerField()
    selected = serializers.BooleanField()
    sku = serializers.CharField(allow_blank=True)


# =============================================================================
# Variant Serializers
# =============================================================================

class ResolvedVariantSerializer(serializers.ModelSerializer):
    """Variant returned for a storefront option selection."""
    options = serializers.SerializerMethodField()
    option_key = serializers.SerializerMethodField()
    is_in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Variant
        fields = [
            'id', 'product', 'sku', 'name', 'sell_price', 'stock_quantity',
            'is_in_stock', 'options', 'option_key',
        ]

    def get_options(self, obj):
        return obj.get_options_dict()

    def get_option_key(self, obj):
        return obj.get_option_key()
