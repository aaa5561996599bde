"""Outcome of a single user action."""

import dataclasses
import functools
import logging
from collections.abc import Callable
from typing import Final, ParamSpec, final

from file_manager.apps.files.exceptions import ErrorKind, FileManagerError

logger = logging.getLogger(__name__)

ERROR_PREFIX: Final = 'Error: '

_P = ParamSpec('_P')


@final
@dataclasses.dataclass(frozen=True, slots=True)
class ActionResult:
    """Success or failure of an action, with the message to show.

    Attributes:
        message: Human readable outcome.
        error: Failure kind, None on success.
        path: Resolved file path, set by successful downloads.
    """

    message: str
    error: ErrorKind | None = None
    path: str | None = None

    @classmethod
    def success(cls, message: str, path: str | None = None) -> 'ActionResult':
        """Create a successful result."""
        return cls(message=message, path=path)

    @classmethod
    def failure(cls, error: FileManagerError) -> 'ActionResult':
        """Create a failed result from an error."""
        return cls(message=error.message, error=error.kind)

    @property
    def ok(self) -> bool:
        """Whether the action succeeded."""
        return self.error is None

    @property
    def status_text(self) -> str:
        """Status line for the page, failures are prefixed."""
        if self.ok:
            return self.message
        return ERROR_PREFIX + self.message


def returns_action_result(
    action: Callable[_P, ActionResult],
) -> Callable[_P, ActionResult]:
    """Turn FileManagerError raised by an action into a failed result.

    Args:
        action: Action function that may raise FileManagerError.

    Returns:
        Wrapped function that always returns an ActionResult.
    """
    @functools.wraps(action)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ActionResult:
        try:
            return action(*args, **kwargs)
        except FileManagerError as error:
            logger.info(
                'Action %s failed: %s (%s)',
                action.__name__,
                error.message,
                error.kind.value,
            )
            return ActionResult.failure(error)

    return wrapper
