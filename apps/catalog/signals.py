"""
Django signals for the catalog app.
Drops the cached variant resolver of a product whenever its variants or
their options change.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import AttributeOption, AttributeType, Variant, VariantAttribute
from .services.variant_navigation import VariantNavigationService


@receiver([post_save, post_delete], sender=Variant)
def invalidate_on_variant_change(sender, instance, **kwargs):
    VariantNavigationService.invalidate_resolver(instance.product_id)


@receiver([post_save, post_delete], sender=VariantAttribute)
def invalidate_on_variant_attribute_change(sender, instance, **kwargs):
    product_id = Variant.objects.filter(
        pk=instance.variant_id
    ).values_list('product_id', flat=True).first()
    if product_id is not None:
        VariantNavigationService.invalidate_resolver(product_id)


@receiver([post_save, post_delete], sender=AttributeOption)
def invalidate_on_option_change(sender, instance, **kwargs):
    VariantNavigationService.invalidate_resolver(instance.product_id)


@receiver(post_save, sender=AttributeType)
def invalidate_on_attribute_type_change(sender, instance, created, **kwargs):
    # Axis names are part of every variant key
    if created:
        return
    product_ids = set(instance.options.values_list('product_id', flat=True))
    for product_id in product_ids:
        VariantNavigationService.invalidate_resolver(product_id)
