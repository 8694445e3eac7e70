from decimal import Decimal

from django.db import models
from django.core.validators import MinValueValidator
from django.utils.text import slugify
from simple_history.models import HistoricalRecords


class Product(models.Model):
    """
    Base product model.
    Example: "Camiseta Básica" which is sold as several variants (Azul / M, ...).
    A product without option axes is sold as a single simple SKU.
    """
    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço base',
        help_text='Preço sugerido para novas combinações de variantes'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )

    # Denormalized copies of the last authored axes and variants
    metadata_attributes = models.JSONField(
        null=True,
        blank=True,
        verbose_name='Metadados: Atributos',
        help_text='JSON dos eixos de opção do produto'
    )
    metadata_variants = models.JSONField(
        null=True,
        blank=True,
        verbose_name='Metadados: Variantes',
        help_text='JSON das variantes do produto'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['name']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)
