"""File manager page: listing plus mkdir, delete, upload and download."""

import logging
import os
from typing import Any, Final, final
from urllib.parse import urlencode

from django.apps import apps
from django.core.exceptions import BadRequest, PermissionDenied
from django.http import FileResponse, HttpRequest, HttpResponse
from django.http.multipartparser import MultiPartParserError
from django.shortcuts import render
from django.views import View

from file_manager.apps.files.exceptions import (
    AccessDeniedError,
    DirectoryReadError,
    NotFoundError,
    TransportError,
)
from file_manager.apps.files.forms import (
    ORDER_CHOICES,
    SORT_CHOICES,
    ListingQueryForm,
)
from file_manager.apps.files.infrastructure.metadata import human_size
from file_manager.apps.files.infrastructure.paths import relative_to, safe_join
from file_manager.apps.files.logic.file_operations import (
    create_folder,
    delete_target,
    prepare_download,
    upload_file,
)
from file_manager.apps.files.logic.listing import (
    Entry,
    build_breadcrumbs,
    list_directory,
    parent_path,
)
from file_manager.apps.files.logic.results import ActionResult
from file_manager.apps.files.options import FileManagerOptions

logger = logging.getLogger(__name__)

ACTION_MKDIR: Final = 'mkdir'
ACTION_DELETE: Final = 'delete'
ACTION_UPLOAD: Final = 'upload'
ACTION_DOWNLOAD: Final = 'download'

_DOWNLOAD_CONTENT_TYPE: Final = 'application/octet-stream'
_UPLOAD_FIELD: Final = 'upload'


def get_options() -> FileManagerOptions:
    """Get the options built when the files app started."""
    return apps.get_app_config('files').options


def link_to(rel: str, **params: str) -> str:
    """Build a query string link to a directory.

    Args:
        rel: Directory path relative to root.
        params: Extra query parameters.

    Returns:
        Link like '?path=docs&sort=size'.
    """
    return '?' + urlencode({'path': rel, **params})


@final
class FileManagerView(View):
    """Single page file manager.

    GET lists a directory or downloads a file, POST runs mkdir, delete
    or upload and then lists the directory with a status line. A
    disabled action is ignored just like an unknown one.
    """

    http_method_names = ['get', 'post']
    template_name = 'files/index.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        """List the directory, or stream a file for action=download."""
        return self._handle(request)

    def post(self, request: HttpRequest) -> HttpResponse:
        """Run the submitted action, then list the directory."""
        return self._handle(request)

    def _handle(self, request: HttpRequest) -> HttpResponse:
        options = get_options()
        form = ListingQueryForm(request.GET)
        if not form.has_valid_path:
            # Never fall back to another directory
            logger.warning(
                'Rejected malformed path: %r',
                request.GET.get('path'),
            )
            raise BadRequest('Invalid path.')
        query = form.query

        try:
            directory = safe_join(options.root, query['path'])
        except AccessDeniedError as error:
            raise PermissionDenied(error.message) from error

        result = self._run_action(request, directory, options)
        if result is not None and result.ok and result.path:
            try:
                return self._download(result.path)
            except OSError:
                logger.exception('Failed to open download: %s', result.path)
                result = ActionResult.failure(NotFoundError('File not found.'))

        status = result.status_text if result is not None else ''
        return self._render_listing(request, directory, options, query, status)

    def _run_action(
        self,
        request: HttpRequest,
        directory: str,
        options: FileManagerOptions,
    ) -> ActionResult | None:
        try:
            action = request.POST.get('action') or request.GET.get('action', '')
            uploaded = request.FILES.get(_UPLOAD_FIELD)
        except MultiPartParserError as error:
            logger.warning('Malformed upload request: %s', error)
            return ActionResult.failure(
                TransportError(f'Upload error: {error}'),
            )

        if action == ACTION_DOWNLOAD:
            return prepare_download(directory, request.GET.get('target', ''))

        # Actions that change the tree only run on CSRF-checked requests
        if request.method != 'POST':
            return None

        if action == ACTION_MKDIR and options.allow_mkdir:
            return create_folder(directory, request.POST.get('dirname', ''))
        if action == ACTION_DELETE and options.allow_delete:
            return delete_target(directory, request.POST.get('target', ''))
        if action == ACTION_UPLOAD and options.allow_upload:
            return upload_file(directory, uploaded, options)
        return None

    def _download(self, path: str) -> FileResponse:
        return FileResponse(
            open(path, 'rb'),  # noqa: SIM115
            as_attachment=True,
            filename=os.path.basename(path),
            content_type=_DOWNLOAD_CONTENT_TYPE,
        )

    def _render_listing(  # noqa: WPS211
        self,
        request: HttpRequest,
        directory: str,
        options: FileManagerOptions,
        query: dict[str, Any],
        status: str,
    ) -> HttpResponse:
        try:
            entries = list_directory(
                directory,
                options,
                query=query['q'],
                sort=query['sort'],
                order=query['order'],
            )
        except DirectoryReadError as error:
            entries = []
            status = status or ActionResult.failure(error).status_text

        current = relative_to(options.root, directory)
        breadcrumbs = build_breadcrumbs(options.root, directory)
        keep = {'q': query['q'], 'sort': query['sort'], 'order': query['order']}
        parent = parent_path(breadcrumbs)

        context = {
            'options': options,
            'status': status,
            'current_path': current,
            'current_link': link_to(current),
            'root_link': link_to(''),
            'breadcrumbs': [
                (crumb, link_to(crumb.rel)) for crumb in breadcrumbs
            ],
            'parent_link': None if parent is None else link_to(parent, **keep),
            'rows': [self._row(entry, current, keep) for entry in entries],
            'query': query,
            'sort_choices': SORT_CHOICES,
            'order_choices': ORDER_CHOICES,
            'max_upload_size': human_size(options.max_upload_size),
        }
        return render(request, self.template_name, context)

    def _row(
        self,
        entry: Entry,
        current: str,
        keep: dict[str, str],
    ) -> dict[str, Any]:
        child = '/'.join(filter(None, (current, entry.name)))
        row: dict[str, Any] = {'entry': entry}
        if entry.is_dir:
            row['open_link'] = link_to(child, **keep)
        else:
            row['download_link'] = link_to(
                current,
                action=ACTION_DOWNLOAD,
                target=entry.name,
            )
        return row
