from .serializers import (
    AttributeOptionSerializer,
    AttributeTypeSerializer,
    OptionPresetSerializer,
    OptionAxisSerializer,
    GenerateCombinationsSerializer,
    CombinationPartSerializer,
    VariantCombinationSerializer,
    ResolvedVariantSerializer,
)

__all__ = [
    'AttributeOptionSerializer',
    'AttributeTypeSerializer',
    'OptionPresetSerializer',
    'OptionAxisSerializer',
    'GenerateCombinationsSerializer',
    'CombinationPartSerializer',
    'VariantCombinationSerializer',
    'ResolvedVariantSerializer',
]
