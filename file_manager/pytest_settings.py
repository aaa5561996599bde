"""Settings for the test run.

The files app initializes its root when Django starts, so the root is
pointed at a throwaway directory before the regular settings are read.
Tests install their own root per test through the app options.
"""

import atexit
import shutil
import tempfile
from os import environ

_TEST_ROOT = tempfile.mkdtemp(prefix='isdw-files-')
atexit.register(shutil.rmtree, _TEST_ROOT, ignore_errors=True)

environ['FILE_MANAGER_ROOT'] = _TEST_ROOT
environ.setdefault('DJANGO_ENV', 'development')

from file_manager.settings import *  # noqa: E402, F403, WPS347
