"""This file contains all the settings used in production.

This file is required and if development.py is present these
values are overridden.
"""

from decouple import Csv
from django.core.exceptions import ImproperlyConfigured

from file_manager.settings.components import config
from file_manager.settings.components.common import SECRET_KEY

# Production flags:
# https://docs.djangoproject.com/en/stable/howto/deployment/

DEBUG = False

ALLOWED_HOSTS = config('DJANGO_ALLOWED_HOSTS', cast=Csv())

if SECRET_KEY == 'insecure-development-key':
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set in production')

# Security
# https://docs.djangoproject.com/en/stable/topics/security/

SECURE_REFERRER_POLICY = 'same-origin'
CSRF_COOKIE_SECURE = config('DJANGO_SECURE_COOKIES', cast=bool, default=True)
