"""Metadata helpers for directory entries: extensions, categories, icons."""

import os
from types import MappingProxyType
from typing import Final, final

FOLDER_CATEGORY: Final = 'folder'
UNKNOWN_CATEGORY: Final = 'unknown'

_ICON_SUFFIX: Final = '.png'
_SIZE_UNITS: Final = ('B', 'KB', 'MB', 'GB', 'TB')
_SIZE_STEP: Final = 1024

_CATEGORY_EXTENSIONS: Final = (
    ('music', ('mp3', 'aac', 'wav', 'flac', 'ogg', 'm4a', 'aiff')),
    ('video', (
        'mp4', 'avi', 'mkv', 'mov', 'wmv', 'webm', 'mpeg', 'mpg', 'm4v',
    )),
    ('image', ('jpg', 'jpeg', 'png', 'gif', 'bmp', 'webp', 'tiff', 'svg')),
    ('document', (
        'pdf', 'doc', 'docx', 'xls', 'xlsx', 'ppt', 'pptx',
        'txt', 'md', 'rtf', 'csv',
    )),
    ('archive', ('zip', 'rar', '7z', 'tar', 'gz', 'bz2', 'xz')),
)

# Lower-case extension -> semantic category, built once at import
CATEGORY_BY_EXTENSION: Final = MappingProxyType({
    extension: category
    for category, extensions in _CATEGORY_EXTENSIONS
    for extension in extensions
})


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Everything after the last dot counts, so dotfiles have an
    extension too ('.bashrc' -> 'bashrc').

    Args:
        filename: Filename (e.g., 'document.PDF').

    Returns:
        Extension without dot, lowercase (e.g., 'pdf').
        Returns empty string if no extension.
    """
    _, dot, extension = filename.rpartition('.')
    if not dot:
        return ''
    return extension.lower()


def category_for_extension(extension: str) -> str:
    """Map a lower-case extension to its semantic category.

    Args:
        extension: Extension without dot (e.g., 'mp3').

    Returns:
        One of music, video, image, document, archive or unknown.
    """
    return CATEGORY_BY_EXTENSION.get(extension, UNKNOWN_CATEGORY)


def human_size(num_bytes: int) -> str:
    """Format a byte count for display.

    Args:
        num_bytes: Size in bytes, negative values count as zero.

    Returns:
        Size with two decimals and a binary unit (e.g., '2.00 KB').
    """
    value = float(max(num_bytes, 0))
    unit_index = 0
    while value >= _SIZE_STEP and unit_index < len(_SIZE_UNITS) - 1:
        value /= _SIZE_STEP
        unit_index += 1
    return f'{value:.2f} {_SIZE_UNITS[unit_index]}'


@final
class IconResolver:
    """Picks the icon URL for a directory entry.

    Files get an extension icon (mp3.png) if one exists, then the icon of
    their category (music.png), then unknown.png. Directories get
    folder.png or unknown.png. Existence is checked on disk every time,
    so icons dropped into the directory show up without a restart.
    """

    def __init__(self, icons_dir: str | None, icons_url: str) -> None:
        """Initialize icon resolver.

        Args:
            icons_dir: Directory holding the icon files, None to disable
                lookups.
            icons_url: URL prefix the icons are served under.
        """
        self._icons_dir = icons_dir
        self._icons_url = icons_url.rstrip('/')

    def resolve(self, name: str, is_dir: bool) -> str:
        """Get icon URL for an entry.

        Args:
            name: Entry name.
            is_dir: Whether the entry is a directory.

        Returns:
            Icon URL (e.g., /static/icons/music.png).
        """
        if is_dir:
            return self._first_available(FOLDER_CATEGORY)

        extension = get_file_extension(name)
        candidates = [category_for_extension(extension)]
        if extension:
            candidates.insert(0, extension)
        return self._first_available(*candidates)

    def _first_available(self, *icon_names: str) -> str:
        for icon_name in icon_names:
            if self._exists(icon_name):
                return self._url_for(icon_name)
        return self._url_for(UNKNOWN_CATEGORY)

    def _exists(self, icon_name: str) -> bool:
        if not self._icons_dir:
            return False
        return os.path.isfile(
            os.path.join(self._icons_dir, icon_name + _ICON_SUFFIX),
        )

    def _url_for(self, icon_name: str) -> str:
        return f'{self._icons_url}/{icon_name}{_ICON_SUFFIX}'
