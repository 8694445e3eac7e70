"""Catalog settings with their defaults."""

from django.conf import settings

DEFAULTS = {
    'MAX_OPTION_AXES': 3,
    'RESOLVER_CACHE_TIMEOUT': 300,
}


def catalog_setting(name):
    """Return ``settings.CATALOG[name]``, falling back to the default."""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown catalog setting: {name}")
    return getattr(settings, 'CATALOG', {}).get(name, DEFAULTS[name])
