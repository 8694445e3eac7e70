from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.catalog'
    label = 'catalog'
    verbose_name = 'Catálogo'

    def ready(self):
        # Registers the resolver cache invalidation receivers
        from . import signals  # noqa: F401
