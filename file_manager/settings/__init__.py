"""Main settings file for the file manager project.

This file uses django-split-settings to stitch the configuration together
from ``components/`` and the environment chosen by ``DJANGO_ENV``.
Do not put settings here, add them to a component instead.
"""

from os import environ

from split_settings.tools import include, optional

# Managing environment via `DJANGO_ENV` variable:
environ.setdefault('DJANGO_ENV', 'development')
_ENV = environ['DJANGO_ENV']

_base_settings = (
    'components/common.py',
    'components/logging.py',
    'components/file_manager.py',
    # Select the right env:
    f'environments/{_ENV}.py',
    # Optionally override some settings:
    optional('environments/local.py'),
)

# Include settings:
include(*_base_settings)
