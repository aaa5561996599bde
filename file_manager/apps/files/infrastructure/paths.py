"""Path sanitization and containment for client supplied paths.

Client paths are relative to a base directory and are never trusted:
every segment is stripped down to a small allow-list of characters and
the joined result must resolve to the base or something beneath it.
"""

import logging
import os
import re
from typing import Final

from file_manager.apps.files.exceptions import AccessDeniedError

logger = logging.getLogger(__name__)

# Character used to split client paths
_PATH_SEPARATOR: Final = '/'

# Letters, digits, dot, underscore, hyphen and space survive
_DISALLOWED_CHARS: Final = re.compile(r'[^A-Za-z0-9._\- ]')

_SKIPPED_SEGMENTS: Final = frozenset(('', '.'))


def sanitize_segment(segment: str) -> str:
    """Strip every character outside the allow-list from a segment.

    The result may be empty. Sanitizing twice gives the same result
    as sanitizing once.

    Args:
        segment: One path segment as sent by the client.

    Returns:
        Segment with disallowed characters removed.
    """
    return _DISALLOWED_CHARS.sub('', segment)


def split_segments(relative: str) -> list[str]:
    """Split a client path into its meaningful segments.

    Backslashes count as separators. Empty and ``.`` segments are dropped.

    Args:
        relative: Client path (e.g., 'docs/../reports').

    Returns:
        Raw, unsanitized segments (e.g., ['docs', '..', 'reports']).
    """
    normalized = relative.replace('\\', _PATH_SEPARATOR)
    return [
        segment
        for segment in normalized.split(_PATH_SEPARATOR)
        if segment not in _SKIPPED_SEGMENTS
    ]


def is_within(base: str, path: str) -> bool:
    """Check that path is base itself or one of its descendants.

    Compares whole components, so ``/data2`` is not within ``/data``.

    Args:
        base: Canonical base directory.
        path: Canonical path to check.

    Returns:
        True if path is contained in base.
    """
    try:
        return os.path.commonpath((base, path)) == base
    except ValueError:
        # Mixed absolute and relative paths
        return False


def safe_join(base: str, relative: str) -> str:
    """Join an untrusted relative path onto base without escaping it.

    Each segment is sanitized, then the joined path is resolved to its
    canonical form. Existing components are resolved through symlinks,
    components that do not exist yet keep their name and ``..`` is
    collapsed against them, so a symlinked ancestor of a future upload
    or folder is checked just like an existing target.

    Args:
        base: Canonical directory the result must stay in.
        relative: Client supplied relative path.

    Returns:
        Canonical absolute path equal to base or beneath it. The path
        may not exist on disk.

    Raises:
        AccessDeniedError: If the path would escape base.
    """
    canonical_base = os.path.realpath(base)
    safe_parts = [
        sanitize_segment(segment) for segment in split_segments(relative)
    ]
    joined = os.path.join(canonical_base, *safe_parts)
    resolved = os.path.realpath(joined)

    if not is_within(canonical_base, resolved):
        logger.warning(
            'Path escapes base directory: %r -> %s (base: %s)',
            relative,
            resolved,
            canonical_base,
        )
        raise AccessDeniedError()

    return resolved


def relative_to(base: str, path: str) -> str:
    """Express a contained path relative to base with ``/`` separators.

    Args:
        base: Canonical base directory.
        path: Canonical path inside base.

    Returns:
        Relative path (e.g., 'docs/reports'), empty string for base itself.
    """
    relative = os.path.relpath(path, base)
    if relative == os.curdir:
        return ''
    return relative.replace(os.sep, _PATH_SEPARATOR)
