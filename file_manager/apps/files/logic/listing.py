"""Business logic for directory listings."""

import dataclasses
import logging
import os
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from operator import attrgetter
from types import MappingProxyType
from typing import Final, final

from file_manager.apps.files.exceptions import DirectoryReadError
from file_manager.apps.files.infrastructure.metadata import (
    FOLDER_CATEGORY,
    IconResolver,
    category_for_extension,
    get_file_extension,
    human_size,
)
from file_manager.apps.files.infrastructure.paths import relative_to
from file_manager.apps.files.options import FileManagerOptions

logger = logging.getLogger(__name__)

SORT_NAME: Final = 'name'
SORT_SIZE: Final = 'size'
SORT_TYPE: Final = 'type'
SORT_MTIME: Final = 'mtime'
SORT_KEYS: Final = (SORT_NAME, SORT_SIZE, SORT_TYPE, SORT_MTIME)

ORDER_ASC: Final = 'asc'
ORDER_DESC: Final = 'desc'
SORT_ORDERS: Final = (ORDER_ASC, ORDER_DESC)

_HIDDEN_PREFIX: Final = '.'
_DIRECTORY_SIZE_LABEL: Final = '-'


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Entry:
    """One child of a listed directory.

    Attributes:
        name: Entry name as found on disk.
        is_dir: Whether the entry is a directory (symlinks followed).
        size: Size in bytes, 0 for directories.
        mtime: Last modification as Unix timestamp.
        extension: Lower-case extension, empty for directories.
        category: folder, music, video, image, document, archive or unknown.
        icon: Icon URL.
    """

    name: str
    is_dir: bool
    size: int
    mtime: float
    extension: str
    category: str
    icon: str

    @property
    def display_size(self) -> str:
        """Human readable size, a dash for directories."""
        if self.is_dir:
            return _DIRECTORY_SIZE_LABEL
        return human_size(self.size)

    @property
    def modified_at(self) -> datetime:
        """Last modification as an aware datetime."""
        return datetime.fromtimestamp(self.mtime, tz=UTC)


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Breadcrumb:
    """One segment of the current directory path."""

    label: str
    rel: str


_SORT_KEY_FUNCTIONS: Final[MappingProxyType[str, Callable[[Entry], object]]] = (
    MappingProxyType({
        SORT_NAME: lambda entry: entry.name.lower(),
        SORT_SIZE: attrgetter('size'),
        SORT_TYPE: attrgetter('category'),
        SORT_MTIME: attrgetter('mtime'),
    })
)


def sort_entries(
    entries: Iterable[Entry],
    sort: str = SORT_NAME,
    order: str = ORDER_ASC,
) -> list[Entry]:
    """Sort entries, directories always before files.

    Within each kind entries are compared by the requested key: name
    case-insensitively, size and mtime numerically, type by category.
    Descending order reverses the within-kind order only.

    Args:
        entries: Entries to sort.
        sort: One of SORT_KEYS, anything else sorts by name.
        order: 'asc' or 'desc', anything else is ascending.

    Returns:
        New sorted list.
    """
    sort_key = _SORT_KEY_FUNCTIONS.get(sort, _SORT_KEY_FUNCTIONS[SORT_NAME])
    reverse = order == ORDER_DESC

    entries = list(entries)
    directories = sorted(
        (entry for entry in entries if entry.is_dir),
        key=sort_key,
        reverse=reverse,
    )
    files = sorted(
        (entry for entry in entries if not entry.is_dir),
        key=sort_key,
        reverse=reverse,
    )
    return directories + files


def matches_query(name: str, query: str) -> bool:
    """Case-insensitive substring match, a blank query matches anything.

    Args:
        name: Entry name.
        query: Search text.

    Returns:
        True if the entry should be listed.
    """
    query = query.strip()
    if not query:
        return True
    return query.lower() in name.lower()


def is_hidden(name: str) -> bool:
    """Check if a name is a dotfile."""
    return name.startswith(_HIDDEN_PREFIX)


def list_directory(
    directory: str,
    options: FileManagerOptions,
    *,
    query: str = '',
    sort: str = SORT_NAME,
    order: str = ORDER_ASC,
) -> list[Entry]:
    """List the immediate children of a directory.

    Args:
        directory: Resolved directory path.
        options: File manager options (hidden files, icons).
        query: Case-insensitive name filter.
        sort: Sort key, see sort_entries.
        order: Sort order, see sort_entries.

    Returns:
        Filtered and sorted entries.

    Raises:
        DirectoryReadError: If the directory cannot be opened.
    """
    logger.debug('Listing directory: %s', directory)
    icon_resolver = options.icon_resolver

    try:
        with os.scandir(directory) as children:
            entries = [
                _build_entry(child, icon_resolver)
                for child in children
                if (options.show_hidden or not is_hidden(child.name))
                and matches_query(child.name, query)
            ]
    except OSError as error:
        logger.warning('Unable to read directory %s: %s', directory, error)
        raise DirectoryReadError() from error

    return sort_entries(entries, sort, order)


def build_breadcrumbs(root: str, directory: str) -> list[Breadcrumb]:
    """Build navigation breadcrumbs from root down to directory.

    Args:
        root: Canonical root directory.
        directory: Resolved directory inside root.

    Returns:
        One breadcrumb per path segment, empty for the root itself.
    """
    relative = relative_to(root, directory)
    breadcrumbs: list[Breadcrumb] = []
    accumulated: list[str] = []
    for segment in filter(None, relative.split('/')):
        accumulated.append(segment)
        breadcrumbs.append(
            Breadcrumb(label=segment, rel='/'.join(accumulated)),
        )
    return breadcrumbs


def parent_path(breadcrumbs: list[Breadcrumb]) -> str | None:
    """Get relative path of the parent directory.

    Args:
        breadcrumbs: Breadcrumbs of the current directory.

    Returns:
        Parent path relative to root ('' for top-level folders),
        None when already at root.
    """
    if not breadcrumbs:
        return None
    if len(breadcrumbs) == 1:
        return ''
    return breadcrumbs[-2].rel


def _build_entry(child: os.DirEntry[str], icon_resolver: IconResolver) -> Entry:
    try:
        is_dir = child.is_dir()
    except OSError:
        is_dir = False

    try:
        stat_result = child.stat()
    except OSError:
        # Dangling symlinks and races with deletes
        size, mtime = 0, 0.0
    else:
        size = 0 if is_dir else stat_result.st_size
        mtime = stat_result.st_mtime

    extension = '' if is_dir else get_file_extension(child.name)
    category = FOLDER_CATEGORY if is_dir else category_for_extension(extension)
    return Entry(
        name=child.name,
        is_dir=is_dir,
        size=size,
        mtime=mtime,
        extension=extension,
        category=category,
        icon=icon_resolver.resolve(child.name, is_dir),
    )
