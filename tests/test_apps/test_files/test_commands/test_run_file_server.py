"""Tests for run_file_server management command."""

from io import StringIO
from unittest import mock

import pytest
from django.core.management import call_command

_COMMAND_MODULE = 'file_manager.apps.files.management.commands.run_file_server'


@pytest.fixture
def wsgi_server():
    """Replace the cheroot server and WSGI application with mocks.

    Yields:
        Mock standing in for the cheroot WSGIServer class.
    """
    app_patch = mock.patch(
        f'{_COMMAND_MODULE}.get_wsgi_application',
        return_value=mock.sentinel.wsgi_app,
    )
    with app_patch, mock.patch(f'{_COMMAND_MODULE}.WSGIServer') as server:
        yield server


class TestRunFileServerCommand:
    """Tests for run_file_server management command."""

    def test_starts_server(self, wsgi_server, use_options, root):
        """Test the server is bound to the given address and started."""
        out = StringIO()

        call_command(
            'run_file_server',
            host='127.0.0.1',
            port=9000,
            threads=4,
            timeout=120,
            stdout=out,
        )

        wsgi_server.assert_called_once_with(
            bind_addr=('127.0.0.1', 9000),
            wsgi_app=mock.sentinel.wsgi_app,
            numthreads=4,
            server_name='ISDW-Files',
            timeout=120,
        )
        wsgi_server.return_value.start.assert_called_once_with()
        wsgi_server.return_value.stop.assert_called_once_with()
        assert f'Serving {root} on http://127.0.0.1:9000/' in out.getvalue()
        assert 'File server stopped' in out.getvalue()

    def test_defaults_from_settings(self, wsgi_server, settings):
        """Test host and port fall back to settings."""
        settings.FILE_SERVER_HOST = '10.0.0.5'
        settings.FILE_SERVER_PORT = 8123

        call_command('run_file_server', stdout=StringIO())

        server_kwargs = wsgi_server.call_args.kwargs
        assert server_kwargs['bind_addr'] == ('10.0.0.5', 8123)
        assert server_kwargs['numthreads'] == 10
        assert server_kwargs['timeout'] == 60

    def test_keyboard_interrupt_stops_server(self, wsgi_server):
        """Test Ctrl+C shuts the server down cleanly."""
        wsgi_server.return_value.start.side_effect = KeyboardInterrupt
        out = StringIO()

        call_command('run_file_server', port=9000, stdout=out)

        wsgi_server.return_value.stop.assert_called_once_with()
        assert 'Shutting down...' in out.getvalue()
        assert 'File server stopped' in out.getvalue()

    def test_server_error_still_stops(self, wsgi_server):
        """Test the server is stopped when binding fails."""
        wsgi_server.return_value.start.side_effect = OSError('in use')

        with pytest.raises(OSError, match='in use'):
            call_command('run_file_server', port=9000, stdout=StringIO())

        wsgi_server.return_value.stop.assert_called_once_with()
