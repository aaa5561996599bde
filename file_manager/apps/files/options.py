"""Immutable file manager configuration, built once at startup."""

import dataclasses
import logging
import os
from typing import Any, Final, final

from file_manager.apps.files.exceptions import RootInitializationError
from file_manager.apps.files.infrastructure.metadata import IconResolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_SIZE: Final = 4096 * 1024 * 1024
_FALLBACK_MODE: Final = 0o775


@final
@dataclasses.dataclass(frozen=True, slots=True)
class FileManagerOptions:
    """Everything the actions need to know about the deployment.

    Attributes:
        root: Canonical root directory, all paths stay beneath it.
        show_hidden: List entries whose name starts with a dot.
        max_upload_size: Largest accepted upload in bytes.
        allow_upload: Accept the upload action.
        allow_delete: Accept the delete action.
        allow_mkdir: Accept the mkdir action.
        icons_dir: Directory with icon files, None to always use unknown.
        icons_url: URL prefix for icons.
        title: Page title.
    """

    root: str
    show_hidden: bool = False
    max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE
    allow_upload: bool = True
    allow_delete: bool = True
    allow_mkdir: bool = True
    icons_dir: str | None = None
    icons_url: str = '/static/icons'
    title: str = 'ISDW Files'

    @property
    def icon_resolver(self) -> IconResolver:
        """Icon resolver for the configured icon location."""
        return IconResolver(self.icons_dir, self.icons_url)


def initialize_root(primary: str, fallback: str) -> str:
    """Pick the root directory.

    Uses the primary directory when it exists, otherwise the fallback,
    creating it if needed.

    Args:
        primary: Configured root directory.
        fallback: Directory to use when primary is unavailable.

    Returns:
        Canonical path of the chosen root.

    Raises:
        RootInitializationError: If neither directory is usable.
    """
    if os.path.isdir(primary):
        return os.path.realpath(primary)

    logger.warning(
        'Root directory %s is unavailable, falling back to %s',
        primary,
        fallback,
    )
    try:
        os.makedirs(fallback, mode=_FALLBACK_MODE, exist_ok=True)
    except OSError as error:
        logger.exception('Failed to create fallback root: %s', fallback)
        raise RootInitializationError(primary, fallback) from error

    if not os.path.isdir(fallback):
        raise RootInitializationError(primary, fallback)
    return os.path.realpath(fallback)


def load_options(settings: Any) -> FileManagerOptions:
    """Build options from Django settings.

    Args:
        settings: Django settings object.

    Returns:
        Frozen options with an initialized root.

    Raises:
        RootInitializationError: If no root directory can be used.
    """
    root = initialize_root(
        settings.FILE_MANAGER_ROOT,
        settings.FILE_MANAGER_FALLBACK_ROOT,
    )
    options = FileManagerOptions(
        root=root,
        show_hidden=settings.FILE_MANAGER_SHOW_HIDDEN,
        max_upload_size=settings.FILE_MANAGER_MAX_UPLOAD_SIZE,
        allow_upload=settings.FILE_MANAGER_ALLOW_UPLOAD,
        allow_delete=settings.FILE_MANAGER_ALLOW_DELETE,
        allow_mkdir=settings.FILE_MANAGER_ALLOW_MKDIR,
        icons_dir=settings.FILE_MANAGER_ICONS_DIR or None,
        icons_url=settings.FILE_MANAGER_ICONS_URL,
        title=settings.FILE_MANAGER_TITLE,
    )
    logger.info('Serving files from %s', options.root)
    return options
