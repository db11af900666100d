"""
Django settings for the KilledIt project.

All deployment-specific values come from environment variables so the same
settings module serves local development, CI and production.
"""
import os
from pathlib import Path

from .database import get_database_config
from .storage import get_storage_settings

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-killedit-dev-key')

DEBUG = os.getenv('DEBUG', 'true').lower() == 'true'

ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', '*').split(',') if h.strip()]


# =============================================================================
# Applications
# =============================================================================

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'apps.core',
    'apps.identity',
    'apps.obituaries',
    'apps.media',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

ASGI_APPLICATION = 'config.asgi.application'

AUTH_USER_MODEL = 'identity.Account'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# =============================================================================
# Database
# =============================================================================

DATABASES = {
    'default': get_database_config(BASE_DIR),
}


# =============================================================================
# Static & Media Storage
# =============================================================================

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

_storage = get_storage_settings(BASE_DIR)
globals().update(_storage)

USE_S3_STORAGE = _storage['USE_S3_STORAGE']


# =============================================================================
# Internationalization
# =============================================================================

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True


# =============================================================================
# Authentication (JWT)
# =============================================================================

JWT_SECRET = os.getenv('JWT_SECRET', SECRET_KEY)


# =============================================================================
# GIF Search (Tenor)
# =============================================================================

# Absence only disables the GIF picker; the rest of the API keeps working.
TENOR_API_KEY = os.getenv('TENOR_API_KEY', '')
TENOR_BASE_URL = os.getenv('TENOR_BASE_URL', 'https://tenor.googleapis.com/v2')
TENOR_CLIENT_KEY = os.getenv('TENOR_CLIENT_KEY', 'killedit')
TENOR_TIMEOUT = int(os.getenv('TENOR_TIMEOUT', '10'))


# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s %(levelname)s [%(name)s] %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'django.request': {
            'handlers': ['console'],
            'level': 'ERROR',
            'propagate': False,
        },
    },
}
