from decimal import Decimal

from django.db import models
from django.core.validators import MinValueValidator
from simple_history.models import HistoricalRecords


class Variant(models.Model):
    """
    Individual SKU with its own price and stock.
    Each variant is a unique combination of attribute options.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Produto'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome',
        help_text='Rótulo legível, ex: "Azul / M" (gerado automaticamente se vazio)'
    )

    # Pricing
    sell_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço de venda'
    )

    # Inventory
    stock_quantity = models.IntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )
    track_inventory = models.BooleanField(
        default=True,
        verbose_name='Rastrear estoque'
    )
    allow_backorder = models.BooleanField(
        default=False,
        verbose_name='Permitir compra sem estoque'
    )

    # Status
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # Attribute options for this variant
    attribute_options = models.ManyToManyField(
        'catalog.AttributeOption',
        through='VariantAttribute',
        related_name='variants',
        verbose_name='Opções de atributos'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['product', 'sku']
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.name or self.sku

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self._generate_name()
        super().save(*args, **kwargs)

    def _generate_name(self):
        """Generate variant name from its attribute options."""
        if not self.pk:
            return self.sku

        options = self.variantattribute_set.select_related(
            'attribute_option__attribute_type'
        ).order_by('attribute_option__attribute_type__display_order')

        if not options.exists():
            return f"{self.product.name} - {self.sku}"

        return ' / '.join(
            opt.attribute_option.get_display_value()
            for opt in options
        )

    def get_option_pairs(self):
        """Return the (axis name, value) pairs that define this variant."""
        from apps.catalog.services.variant_adapters import attribute_option_pairs
        return attribute_option_pairs(self)

    def get_options_dict(self):
        """Return dict of {axis name: option value}"""
        return {pair.axis_name: pair.value for pair in self.get_option_pairs()}

    def get_option_key(self):
        from apps.catalog.services.variant_keys import canonical_key
        return canonical_key(self.get_option_pairs())

    @property
    def is_in_stock(self):
        if not self.track_inventory:
            return True
        return self.stock_quantity > 0 or self.allow_backorder


class VariantAttribute(models.Model):
    """
    Through model linking Variant to AttributeOption.
    Ensures each variant has only one value per attribute type.
    """
    variant = models.ForeignKey(
        Variant,
        on_delete=models.CASCADE,
        verbose_name='Variante'
    )
    attribute_option = models.ForeignKey(
        'catalog.AttributeOption',
        on_delete=models.CASCADE,
        verbose_name='Opção de Atributo'
    )

    class Meta:
        unique_together = ['variant', 'attribute_option']
        verbose_name = 'Atributo da Variante'
        verbose_name_plural = 'Atributos das Variantes'

    def __str__(self):
        return f"{self.variant.sku} - {self.attribute_option}"

    def save(self, *args, **kwargs):
        # Ensure only one option per attribute type per variant
        existing = VariantAttribute.objects.filter(
            variant=self.variant,
            attribute_option__attribute_type=self.attribute_option.attribute_type
        ).exclude(pk=self.pk)

        if existing.exists():
            existing.delete()

        super().save(*args, **kwargs)
