"""This file contains all the settings that defines the development server.

SECURITY WARNING: don't run with debug turned on in production!
"""

from file_manager.settings.components.logging import LOGGING

# Setting the development status:

DEBUG = True

ALLOWED_HOSTS = [
    'localhost',
    '0.0.0.0',  # noqa: S104
    '127.0.0.1',
    '[::1]',
    'testserver',
]

LOGGING['loggers']['file_manager']['level'] = 'DEBUG'
