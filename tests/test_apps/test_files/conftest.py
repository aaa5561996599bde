"""Shared fixtures for files app tests."""

import dataclasses
import os
from collections.abc import Callable
from pathlib import Path

import pytest
from django.apps import apps

from file_manager.apps.files.options import FileManagerOptions

REPORT_SIZE = 2048


@pytest.fixture
def root(tmp_path: Path) -> str:
    """Create an empty root directory.

    Returns:
        Canonical path of the root directory.
    """
    root_dir = tmp_path / 'root'
    root_dir.mkdir()
    return os.path.realpath(root_dir)


@pytest.fixture
def outside(tmp_path: Path) -> Path:
    """Create a directory next to the root, never reachable from it.

    Returns:
        Path of the outside directory, holding secret.txt.
    """
    outside_dir = tmp_path / 'outside'
    outside_dir.mkdir()
    (outside_dir / 'secret.txt').write_text('secret')
    return outside_dir


@pytest.fixture
def sample_tree(root: str) -> str:
    """Populate root with docs/report.pdf and an empty archive folder.

    Returns:
        Canonical path of the root directory.
    """
    docs = Path(root) / 'docs'
    docs.mkdir()
    (docs / 'report.pdf').write_bytes(b'x' * REPORT_SIZE)
    (Path(root) / 'archive').mkdir()
    return root


@pytest.fixture
def options(root: str) -> FileManagerOptions:
    """Default options for the test root.

    Returns:
        FileManagerOptions with every capability enabled.
    """
    return FileManagerOptions(root=root)


@pytest.fixture
def use_options(
    options: FileManagerOptions,
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[..., FileManagerOptions]:
    """Install options on the files app, optionally overriding fields.

    Returns:
        Function taking field overrides and returning installed options.
    """
    app_config = apps.get_app_config('files')

    def factory(**overrides: object) -> FileManagerOptions:
        installed = dataclasses.replace(options, **overrides)
        monkeypatch.setattr(app_config, 'options', installed)
        return installed

    factory()
    return factory
