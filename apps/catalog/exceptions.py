"""
Exceptions raised by the catalog services.

Authoring errors subclass Django's ValidationError so forms and DRF
serializers report them like any other invalid input.
"""

from django.core.exceptions import ValidationError


class OptionAxisError(ValidationError):
    """An option axis cannot be added to or removed from a draft."""


class DuplicateVariantError(ValidationError):
    """Two variants of a product would share the same option assignment."""

    def __init__(self, message, key=None):
        super().__init__(message, code='duplicate_variant')
        self.key = key
