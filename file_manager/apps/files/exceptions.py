"""Exceptions for files app."""

import enum
from typing import ClassVar, final

from django.core.exceptions import ImproperlyConfigured


@final
class ErrorKind(enum.Enum):
    """Failure categories reported back to the user."""

    ACCESS_DENIED = 'access_denied'
    EMPTY_NAME = 'empty_name'
    INVALID_NAME = 'invalid_name'
    ALREADY_EXISTS = 'already_exists'
    NOT_FOUND = 'not_found'
    CREATE_FAILED = 'create_failed'
    DELETE_FAILED = 'delete_failed'
    SAVE_FAILED = 'save_failed'
    TOO_LARGE = 'too_large'
    TRANSPORT_ERROR = 'transport_error'
    DIRECTORY_READ_FAILED = 'directory_read_failed'


class FileManagerError(Exception):
    """Base class for every error an action can report.

    Subclasses pin a :class:`ErrorKind` and a default message, so
    ``raise NotFoundError()`` is enough in most places.
    """

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str]

    def __init__(self, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human readable message, defaults to the class message.
        """
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        """Message shown to the user."""
        return str(self)


class AccessDeniedError(FileManagerError):
    """Raised when a path would escape the root directory."""

    kind = ErrorKind.ACCESS_DENIED
    default_message = 'Access denied.'


class EmptyNameError(FileManagerError):
    """Raised when a folder name is empty after sanitization."""

    kind = ErrorKind.EMPTY_NAME
    default_message = 'Folder name is required.'


class InvalidNameError(FileManagerError):
    """Raised when an uploaded file name is empty after sanitization."""

    kind = ErrorKind.INVALID_NAME
    default_message = 'Invalid filename.'


class AlreadyExistsError(FileManagerError):
    kind = ErrorKind.ALREADY_EXISTS
    default_message = 'Folder already exists.'


class NotFoundError(FileManagerError):
    kind = ErrorKind.NOT_FOUND
    default_message = 'Target not found.'


class CreateFailedError(FileManagerError):
    kind = ErrorKind.CREATE_FAILED
    default_message = 'Failed to create folder.'


class DeleteFailedError(FileManagerError):
    kind = ErrorKind.DELETE_FAILED
    default_message = 'Failed to delete.'


class SaveFailedError(FileManagerError):
    kind = ErrorKind.SAVE_FAILED
    default_message = 'Failed to save uploaded file.'


class TooLargeError(FileManagerError):
    """Raised when an upload is bigger than the configured maximum."""

    kind = ErrorKind.TOO_LARGE
    default_message = 'File too large.'

    def __init__(self, max_size: int, size: int) -> None:
        """Initialize TooLargeError.

        Args:
            max_size: Configured upload limit in bytes.
            size: Size of the rejected upload in bytes.
        """
        self.max_size = max_size
        self.size = size
        super().__init__()


class TransportError(FileManagerError):
    """Raised when the upload never made it through the request body."""

    kind = ErrorKind.TRANSPORT_ERROR
    default_message = 'No file uploaded.'


class DirectoryReadError(FileManagerError):
    kind = ErrorKind.DIRECTORY_READ_FAILED
    default_message = 'Unable to read directory.'


class RootInitializationError(ImproperlyConfigured):
    """Raised at startup when neither root nor fallback is usable."""

    def __init__(self, primary: str, fallback: str) -> None:
        """Initialize RootInitializationError.

        Args:
            primary: Configured root directory.
            fallback: Fallback root directory.
        """
        self.primary = primary
        self.fallback = fallback
        super().__init__(
            f'Failed to initialize data root: neither {primary!r} '
            f'nor fallback {fallback!r} is a usable directory',
        )
