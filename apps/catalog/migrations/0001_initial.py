# Generated manually

from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import simple_history.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AttributeType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=100, unique=True, verbose_name='Slug')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Ordem de exibição')),
            ],
            options={
                'verbose_name': 'Tipo de Atributo',
                'verbose_name_plural': 'Tipos de Atributos',
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='OptionPreset',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='Nome')),
                ('axis_name', models.CharField(help_text='Nome do atributo criado ao aplicar o preset', max_length=100, verbose_name='Nome do eixo')),
                ('values', models.JSONField(default=list, verbose_name='Valores sugeridos')),
            ],
            options={
                'verbose_name': 'Preset de Opções',
                'verbose_name_plural': 'Presets de Opções',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=255, unique=True, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('base_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Preço sugerido para novas combinações de variantes', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço base')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('metadata_attributes', models.JSONField(blank=True, help_text='JSON dos eixos de opção do produto', null=True, verbose_name='Metadados: Atributos')),
                ('metadata_variants', models.JSONField(blank=True, help_text='JSON das variantes do produto', null=True, verbose_name='Metadados: Variantes')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='AttributeOption',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('value', models.CharField(max_length=100, verbose_name='Valor')),
                ('display_value', models.CharField(blank=True, help_text='Nome alternativo para exibição (opcional)', max_length=100, verbose_name='Valor de exibição')),
                ('color_hex', models.CharField(blank=True, help_text='Para swatches de cor (#RRGGBB)', max_length=7, validators=[django.core.validators.RegexValidator(message='Cor deve estar no formato hexadecimal (#RRGGBB)', regex='^#[0-9A-Fa-f]{6}$')], verbose_name='Cor Hex')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Ordem de exibição')),
                ('attribute_type', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='options', to='catalog.attributetype', verbose_name='Tipo de Atributo')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attribute_options', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Opção de Atributo',
                'verbose_name_plural': 'Opções de Atributos',
                'ordering': ['display_order', 'value'],
                'unique_together': {('attribute_type', 'product', 'value')},
            },
        ),
        migrations.CreateModel(
            name='Variant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sku', models.CharField(max_length=100, unique=True, verbose_name='SKU')),
                ('name', models.CharField(blank=True, help_text='Rótulo legível, ex: "Azul / M" (gerado automaticamente se vazio)', max_length=255, verbose_name='Nome')),
                ('sell_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço de venda')),
                ('stock_quantity', models.IntegerField(default=0, verbose_name='Quantidade em estoque')),
                ('track_inventory', models.BooleanField(default=True, verbose_name='Rastrear estoque')),
                ('allow_backorder', models.BooleanField(default=False, verbose_name='Permitir compra sem estoque')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='variants', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Variante',
                'verbose_name_plural': 'Variantes',
                'ordering': ['product', 'sku'],
            },
        ),
        migrations.CreateModel(
            name='VariantAttribute',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('attribute_option', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='catalog.attributeoption', verbose_name='Opção de Atributo')),
                ('variant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='catalog.variant', verbose_name='Variante')),
            ],
            options={
                'verbose_name': 'Atributo da Variante',
                'verbose_name_plural': 'Atributos das Variantes',
                'unique_together': {('variant', 'attribute_option')},
            },
        ),
        migrations.AddField(
            model_name='variant',
            name='attribute_options',
            field=models.ManyToManyField(related_name='variants', through='catalog.VariantAttribute', to='catalog.attributeoption', verbose_name='Opções de atributos'),
        ),

        # simple_history tables
        migrations.CreateModel(
            name='HistoricalProduct',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=255, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('base_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Preço sugerido para novas combinações de variantes', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço base')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('metadata_attributes', models.JSONField(blank=True, help_text='JSON dos eixos de opção do produto', null=True, verbose_name='Metadados: Atributos')),
                ('metadata_variants', models.JSONField(blank=True, help_text='JSON das variantes do produto', null=True, verbose_name='Metadados: Variantes')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Atualizado em')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'historical Produto',
                'verbose_name_plural': 'historical Produtos',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name='HistoricalVariant',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('sku', models.CharField(db_index=True, max_length=100, verbose_name='SKU')),
                ('name', models.CharField(blank=True, help_text='Rótulo legível, ex: "Azul / M" (gerado automaticamente se vazio)', max_length=255, verbose_name='Nome')),
                ('sell_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Preço de venda')),
                ('stock_quantity', models.IntegerField(default=0, verbose_name='Quantidade em estoque')),
                ('track_inventory', models.BooleanField(default=True, verbose_name='Rastrear estoque')),
                ('allow_backorder', models.BooleanField(default=False, verbose_name='Permitir compra sem estoque')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Atualizado em')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('product', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'historical Variante',
                'verbose_name_plural': 'historical Variantes',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
