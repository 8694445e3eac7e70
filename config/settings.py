"""
Django settings for the catalog project.

Values come from the environment where a deployment needs to change them;
everything else is fixed here.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-catalog-dev-key')

DEBUG = os.getenv('DJANGO_DEBUG', 'True').lower() in ('true', '1', 'yes')

ALLOWED_HOSTS = os.getenv('DJANGO_ALLOWED_HOSTS', '*').split(',')

# ---------------------------------------------------------
# Installed Applications
# ---------------------------------------------------------
INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',

    # Third-party apps
    'rest_framework',
    'simple_history',

    # Local apps
    'apps.catalog.apps.CatalogConfig',
]

MIDDLEWARE = [
    'django.middleware.common.CommonMiddleware',
    'simple_history.middleware.HistoryRequestMiddleware',
]

# ---------------------------------------------------------
# Database
# ---------------------------------------------------------
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.getenv('DATABASE_PATH', str(BASE_DIR / 'db.sqlite3')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ---------------------------------------------------------
# Cache (variant resolvers are cached per product)
# ---------------------------------------------------------
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'catalog',
    }
}

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

REST_FRAMEWORK = {
    'COERCE_DECIMAL_TO_STRING': True,
}

# ---------------------------------------------------------
# Catalog
# ---------------------------------------------------------
CATALOG = {
    'MAX_OPTION_AXES': int(os.getenv('CATALOG_MAX_OPTION_AXES', 3)),
    'RESOLVER_CACHE_TIMEOUT': int(os.getenv('CATALOG_RESOLVER_CACHE_TIMEOUT', 300)),
}

# ---------------------------------------------------------
# Logging
# ---------------------------------------------------------
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[%(asctime)s] %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'apps.catalog': {
            'handlers': ['console'],
            'level': os.getenv('CATALOG_LOG_LEVEL', 'INFO'),
            'propagate': True,
        },
    },
}
