"""
Base Django settings for LicenseRequirementsService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-license-requirements-local-only")

# Application definition
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # Local apps
    "LicenseRequirementsService",
    "core",
    "requirements",
    "applications",
    "provisioning",
]

# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": "license_requirements",
        "USER": "postgres",
        "PASSWORD": "postgres",
        "HOST": "localhost",
        "PORT": "5432",
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Redis Cache
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/1"),
        "OPTIONS": {
            "socket_connect_timeout": 5,
            "socket_timeout": 5,
        },
    }
}

# View invalidation: lifetime of a view's version token, in seconds
VIEW_CACHE_TIMEOUT = int(os.environ.get("VIEW_CACHE_TIMEOUT", 60 * 60 * 24))

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "production"))
