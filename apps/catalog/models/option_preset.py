from django.db import models


class OptionPreset(models.Model):
    """
    Reusable option axis with suggested values.
    Example: preset "Tamanhos de camiseta" -> axis "Tamanho" with ["P", "M", "G"].
    Applying a preset to a draft adds the axis with these values.
    """
    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='Nome'
    )
    axis_name = models.CharField(
        max_length=100,
        verbose_name='Nome do eixo',
        help_text='Nome do atributo criado ao aplicar o preset'
    )
    values = models.JSONField(
        default=list,
        verbose_name='Valores sugeridos'
    )

    class Meta:
        ordering = ['name']
        verbose_name = 'Preset de Opções'
        verbose_name_plural = 'Presets de Opções'

    def __str__(self):
        return f"{self.name} ({self.axis_name})"
