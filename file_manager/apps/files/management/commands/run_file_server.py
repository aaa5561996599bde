"""Serve the file manager with cheroot instead of Django's dev server."""

import logging
from typing import Any, Final, final

from typing_extensions import override

from cheroot.wsgi import Server as WSGIServer
from django.apps import apps
from django.conf import settings
from django.core.management.base import BaseCommand, CommandParser
from django.core.wsgi import get_wsgi_application

logger = logging.getLogger(__name__)

_SERVER_NAME: Final = 'ISDW-Files'
_DEFAULT_THREADS: Final = 10

# Idle connection timeout in seconds
_DEFAULT_TIMEOUT: Final = 60


@final
class Command(BaseCommand):
    """Serve the file manager on a threaded cheroot WSGI server."""

    help = 'Serve the file manager on a standalone WSGI server'

    @override
    def add_arguments(self, parser: CommandParser) -> None:
        """Add command arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--host',
            help='Host to bind to (default: FILE_SERVER_HOST)',
        )
        parser.add_argument(
            '--port',
            type=int,
            help='Port to bind to (default: FILE_SERVER_PORT)',
        )
        parser.add_argument(
            '--threads',
            type=int,
            default=_DEFAULT_THREADS,
            help=f'Worker threads (default: {_DEFAULT_THREADS})',
        )
        parser.add_argument(
            '--timeout',
            type=int,
            default=_DEFAULT_TIMEOUT,
            help=f'Socket timeout in seconds (default: {_DEFAULT_TIMEOUT})',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Run the server until interrupted."""
        host = options['host'] or settings.FILE_SERVER_HOST
        port = options['port'] or settings.FILE_SERVER_PORT
        root = apps.get_app_config('files').options.root

        server = WSGIServer(
            bind_addr=(host, port),
            wsgi_app=get_wsgi_application(),
            numthreads=options['threads'],
            server_name=_SERVER_NAME,
            timeout=options['timeout'],
        )

        self.stdout.write(
            self.style.SUCCESS(f'Serving {root} on http://{host}:{port}/'),
        )
        logger.info(
            'File server starting on %s:%d with %d threads, root %s',
            host,
            port,
            options['threads'],
            root,
        )
        try:
            server.start()
        except KeyboardInterrupt:
            self.stdout.write(self.style.WARNING('Shutting down...'))
        finally:
            server.stop()
            logger.info('File server stopped')
            self.stdout.write('File server stopped')
