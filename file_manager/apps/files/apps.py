"""Django app configuration for files app."""

from typing_extensions import override

from django.apps import AppConfig
from django.conf import settings

from file_manager.apps.files.options import FileManagerOptions, load_options


class FilesConfig(AppConfig):
    """Configuration for files app."""

    name = 'file_manager.apps.files'
    label = 'files'
    verbose_name = 'Files'

    options: FileManagerOptions

    @override
    def ready(self) -> None:
        """Resolve the root directory once, before serving anything.

        Raises RootInitializationError when no root is usable, which
        stops Django from starting.
        """
        self.options = load_options(settings)
