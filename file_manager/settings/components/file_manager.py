"""File manager settings."""

from file_manager.settings.components import BASE_DIR, config

# Directory tree exposed over HTTP, and where to go if it is unavailable
FILE_MANAGER_ROOT = config('FILE_MANAGER_ROOT', default='/data')
FILE_MANAGER_FALLBACK_ROOT = config(
    'FILE_MANAGER_FALLBACK_ROOT',
    default=str(BASE_DIR.joinpath('data')),
)

# Listing
FILE_MANAGER_SHOW_HIDDEN = config(
    'FILE_MANAGER_SHOW_HIDDEN',
    cast=bool,
    default=False,
)

# Capabilities
FILE_MANAGER_MAX_UPLOAD_SIZE = config(
    'FILE_MANAGER_MAX_UPLOAD_SIZE',
    cast=int,
    default=4096 * 1024 * 1024,
)
FILE_MANAGER_ALLOW_UPLOAD = config(
    'FILE_MANAGER_ALLOW_UPLOAD',
    cast=bool,
    default=True,
)
FILE_MANAGER_ALLOW_DELETE = config(
    'FILE_MANAGER_ALLOW_DELETE',
    cast=bool,
    default=True,
)
FILE_MANAGER_ALLOW_MKDIR = config(
    'FILE_MANAGER_ALLOW_MKDIR',
    cast=bool,
    default=True,
)

# Icons: files are looked up in ICONS_DIR and linked under ICONS_URL
FILE_MANAGER_ICONS_DIR = config(
    'FILE_MANAGER_ICONS_DIR',
    default=str(BASE_DIR.joinpath('static', 'icons')),
)
FILE_MANAGER_ICONS_URL = config(
    'FILE_MANAGER_ICONS_URL',
    default='/static/icons',
)

FILE_MANAGER_TITLE = config('FILE_MANAGER_TITLE', default='ISDW Files')

# Standalone WSGI server host and port
FILE_SERVER_HOST = config('FILE_SERVER_HOST', default='0.0.0.0')  # noqa: S104
FILE_SERVER_PORT = config('FILE_SERVER_PORT', cast=int, default=8000)
