"""Business logic for file operations.

Each action takes an already resolved directory, resolves its own target
with safe_join and returns an ActionResult. Errors are raised as
FileManagerError subclasses and turned into failed results by
returns_action_result.
"""

import logging
import os
from typing import Final

from django.core.files.uploadedfile import UploadedFile

from file_manager.apps.files.exceptions import (
    AccessDeniedError,
    AlreadyExistsError,
    CreateFailedError,
    DeleteFailedError,
    EmptyNameError,
    InvalidNameError,
    NotFoundError,
    SaveFailedError,
    TooLargeError,
    TransportError,
)
from file_manager.apps.files.infrastructure.paths import (
    safe_join,
    sanitize_segment,
)
from file_manager.apps.files.logic.results import (
    ActionResult,
    returns_action_result,
)
from file_manager.apps.files.options import FileManagerOptions

logger = logging.getLogger(__name__)

_FOLDER_MODE: Final = 0o775


@returns_action_result
def create_folder(directory: str, name: str) -> ActionResult:
    """Create one folder inside directory.

    Args:
        directory: Resolved current directory.
        name: Requested folder name, sanitized before use.

    Returns:
        Result of the action.
    """
    folder_name = sanitize_segment(name)
    if not folder_name:
        raise EmptyNameError()

    folder_path = safe_join(directory, folder_name)
    if os.path.lexists(folder_path):
        raise AlreadyExistsError()

    try:
        os.mkdir(folder_path, _FOLDER_MODE)
    except FileExistsError as error:
        # Lost a race with a concurrent request
        raise AlreadyExistsError() from error
    except OSError as error:
        logger.exception('Failed to create folder: %s', folder_path)
        raise CreateFailedError() from error

    logger.info('Folder created: %s', folder_path)
    return ActionResult.success('Folder created.')


@returns_action_result
def delete_target(directory: str, target: str) -> ActionResult:
    """Delete a file or an empty folder inside directory.

    Folders are removed only when empty, there is no recursive delete.

    Args:
        directory: Resolved current directory.
        target: Name of the entry relative to directory.

    Returns:
        Result of the action.
    """
    target_path = safe_join(directory, target)
    if target_path == os.path.realpath(directory):
        # An empty target resolves to the current directory itself
        logger.warning('Refusing to delete current directory: %s', directory)
        raise AccessDeniedError()

    if not os.path.exists(target_path):
        raise NotFoundError()

    if os.path.isdir(target_path):
        try:
            os.rmdir(target_path)
        except OSError as error:
            logger.warning('Failed to delete folder %s: %s', target_path, error)
            raise DeleteFailedError(
                'Failed to delete folder. Make sure it is empty.',
            ) from error
        logger.info('Folder deleted: %s', target_path)
        return ActionResult.success('Folder deleted.')

    try:
        os.unlink(target_path)
    except OSError as error:
        logger.exception('Failed to delete file: %s', target_path)
        raise DeleteFailedError('Failed to delete file.') from error
    logger.info('File deleted: %s', target_path)
    return ActionResult.success('File deleted.')


@returns_action_result
def upload_file(
    directory: str,
    uploaded: UploadedFile | None,
    options: FileManagerOptions,
) -> ActionResult:
    """Save an uploaded file into directory, overwriting silently.

    The size limit is checked before anything is written, and a failed
    write removes what was written so far.

    Args:
        directory: Resolved current directory.
        uploaded: File received with the request, None if missing.
        options: File manager options (upload size limit).

    Returns:
        Result of the action.
    """
    if uploaded is None:
        raise TransportError()

    try:
        return _save_upload(directory, uploaded, options)
    finally:
        uploaded.close()


@returns_action_result
def prepare_download(directory: str, target: str) -> ActionResult:
    """Resolve a regular file for download.

    Args:
        directory: Resolved current directory.
        target: Name of the file relative to directory.

    Returns:
        Result carrying the resolved file path on success.
    """
    target_path = safe_join(directory, target)
    if not os.path.isfile(target_path):
        raise NotFoundError('File not found.')

    logger.info('Download requested: %s', target_path)
    return ActionResult.success('Download started.', path=target_path)


def upload_basename(client_name: str) -> str:
    """Reduce a client supplied file name to a safe basename.

    Args:
        client_name: Name as sent by the browser, may contain a path.

    Returns:
        Sanitized last path component, possibly empty.
    """
    normalized = client_name.replace('\\', '/')
    return sanitize_segment(normalized.rsplit('/', 1)[-1])


def _save_upload(
    directory: str,
    uploaded: UploadedFile,
    options: FileManagerOptions,
) -> ActionResult:
    if uploaded.size is not None and uploaded.size > options.max_upload_size:
        logger.warning(
            'Upload rejected, %d bytes exceeds limit of %d bytes',
            uploaded.size,
            options.max_upload_size,
        )
        raise TooLargeError(options.max_upload_size, uploaded.size)

    basename = upload_basename(uploaded.name or '')
    if not basename:
        raise InvalidNameError()

    destination = safe_join(directory, basename)
    logger.info('Saving upload to: %s', destination)
    try:
        with open(destination, 'wb') as output:
            for chunk in uploaded.chunks():
                output.write(chunk)
    except OSError as error:
        logger.exception('Failed to save uploaded file: %s', destination)
        _remove_partial(destination)
        raise SaveFailedError() from error

    logger.info('File uploaded: %s (%s bytes)', destination, uploaded.size)
    return ActionResult.success('File uploaded.')


def _remove_partial(path: str) -> None:
    try:
        if os.path.isfile(path):
            os.unlink(path)
    except OSError:
        # Keep reporting the save error
        logger.exception('Failed to remove partial upload: %s', path)
