"""Django settings shared by every environment.

For the full list of settings and their config, see:
https://docs.djangoproject.com/en/stable/ref/settings/
"""

from typing import Final

from file_manager.settings.components import BASE_DIR, config

SECRET_KEY = config('DJANGO_SECRET_KEY', default='insecure-development-key')

# Application definition:

INSTALLED_APPS: tuple[str, ...] = (
    'django.contrib.staticfiles',
    # Your apps go here:
    'file_manager.apps.files',
)

MIDDLEWARE: tuple[str, ...] = (
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
)

ROOT_URLCONF = 'file_manager.urls'

WSGI_APPLICATION = 'file_manager.wsgi.application'

# The file manager keeps no state of its own, the filesystem is the store.
DATABASES: Final[dict[str, dict[str, str]]] = {}

# Internationalization
# https://docs.djangoproject.com/en/stable/topics/i18n/

LANGUAGE_CODE = 'en-us'

USE_I18N = True

USE_TZ = True
TIME_ZONE = config('DJANGO_TIME_ZONE', default='UTC')

# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/stable/howto/static-files/

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR.joinpath('staticfiles')

# Templates
# https://docs.djangoproject.com/en/stable/ref/templates/api

TEMPLATES = [{
    'APP_DIRS': True,
    'BACKEND': 'django.template.backends.django.DjangoTemplates',
    'OPTIONS': {
        'context_processors': [
            'django.template.context_processors.debug',
            'django.template.context_processors.request',
        ],
    },
}]

# Security
# https://docs.djangoproject.com/en/stable/topics/security/

SESSION_COOKIE_HTTPONLY = True
CSRF_COOKIE_HTTPONLY = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'
