"""Tests for path sanitization and root containment."""

import os
from pathlib import Path

import pytest

from file_manager.apps.files.exceptions import AccessDeniedError
from file_manager.apps.files.infrastructure.paths import (
    is_within,
    relative_to,
    safe_join,
    sanitize_segment,
    split_segments,
)

_HOSTILE_PATHS = (
    '..',
    '../',
    '../etc/passwd',
    '../../../../../../etc/passwd',
    'docs/../../outside',
    'docs/../../../',
    '..\\..\\windows',
    'docs\\..\\..\\outside',
    '/etc/passwd',
    '//etc//passwd',
    '%2e%2e%2f%2e%2e%2fetc',
    '..%2f..%2fetc',
    './.././..',
    '....//....//etc',
    '\x00../etc',
    '',
    '.',
    '/',
)


class TestSanitizeSegment:
    """Tests for sanitize_segment."""

    def test_keeps_allowed_characters(self):
        """Test letters, digits, dot, underscore, hyphen and space survive."""
        assert sanitize_segment('My File-1_v2.txt') == 'My File-1_v2.txt'

    def test_strips_separators_and_specials(self):
        """Test path separators and punctuation are removed."""
        assert sanitize_segment('../../etc') == '....etc'
        assert sanitize_segment('a/b\\c') == 'abc'
        assert sanitize_segment('report (final)!.pdf') == 'report final.pdf'

    def test_strips_non_ascii_and_control_characters(self):
        """Test characters outside ASCII letters are removed."""
        assert sanitize_segment('naïve\x00\n.txt') == 'nave.txt'

    def test_empty_result(self):
        """Test a segment of only disallowed characters becomes empty."""
        assert sanitize_segment('???<>|') == ''
        assert sanitize_segment('') == ''

    @pytest.mark.parametrize('segment', [
        '../../etc',
        'report (final)!.pdf',
        'naïve.txt',
        '%2e%2e',
        '   ',
    ])
    def test_idempotent(self, segment):
        """Test sanitizing twice equals sanitizing once."""
        once = sanitize_segment(segment)

        assert sanitize_segment(once) == once


class TestSplitSegments:
    """Tests for split_segments."""

    def test_drops_empty_and_dot_segments(self):
        """Test empty and current-directory segments are skipped."""
        assert split_segments('/docs//./reports/') == ['docs', 'reports']

    def test_backslash_is_separator(self):
        """Test backslashes split segments like slashes."""
        assert split_segments('docs\\reports\\..') == ['docs', 'reports', '..']

    def test_empty_path(self):
        """Test empty path has no segments."""
        assert split_segments('') == []


class TestSafeJoin:
    """Tests for safe_join."""

    def test_empty_path_is_root(self, root):
        """Test empty relative path resolves to root."""
        assert safe_join(root, '') == root

    def test_nested_missing_path(self, root):
        """Test not-yet-existing paths are accepted under root."""
        result = safe_join(root, 'docs/new folder')

        assert result == os.path.join(root, 'docs', 'new folder')

    def test_existing_path(self, sample_tree):
        """Test existing paths resolve to their canonical form."""
        result = safe_join(sample_tree, 'docs/report.pdf')

        assert result == os.path.join(sample_tree, 'docs', 'report.pdf')

    def test_inner_traversal_collapses(self, sample_tree):
        """Test '..' that stays inside root is collapsed."""
        assert safe_join(sample_tree, 'docs/../archive') == os.path.join(
            sample_tree,
            'archive',
        )

    def test_parent_escape_denied(self, root):
        """Test climbing above root is rejected."""
        with pytest.raises(AccessDeniedError, match='Access denied'):
            safe_join(root, '../outside')

    def test_absolute_path_stays_inside(self, root):
        """Test absolute-looking paths are treated as relative."""
        assert safe_join(root, '/etc/passwd') == os.path.join(
            root,
            'etc',
            'passwd',
        )

    def test_encoded_traversal_is_literal(self, root):
        """Test percent-encoded separators are stripped, not decoded."""
        assert safe_join(root, '..%2f..%2fetc') == os.path.join(
            root,
            '..2f..2fetc',
        )

    def test_base_is_a_subdirectory(self, sample_tree):
        """Test containment is checked against the given base."""
        docs = os.path.join(sample_tree, 'docs')

        with pytest.raises(AccessDeniedError):
            safe_join(docs, '../archive')

    @pytest.mark.parametrize('relative', _HOSTILE_PATHS)
    def test_never_escapes_root(self, sample_tree, outside, relative):
        """Test hostile inputs either resolve inside root or are denied."""
        try:
            result = safe_join(sample_tree, relative)
        except AccessDeniedError:
            return

        assert is_within(sample_tree, result)

    def test_symlink_to_outside_denied(self, root, outside):
        """Test an existing symlink pointing outside root is rejected."""
        os.symlink(outside, os.path.join(root, 'escape'))

        with pytest.raises(AccessDeniedError):
            safe_join(root, 'escape/secret.txt')

    def test_missing_target_below_symlink_denied(self, root, outside):
        """Test a new file below a symlinked directory is rejected."""
        os.symlink(outside, os.path.join(root, 'escape'))

        with pytest.raises(AccessDeniedError):
            safe_join(root, 'escape/new-upload.txt')

        assert not (outside / 'new-upload.txt').exists()

    def test_dangling_symlink_to_outside_denied(self, root, outside):
        """Test a dangling symlink whose target is outside is rejected."""
        os.symlink(outside / 'missing', os.path.join(root, 'dangling'))

        with pytest.raises(AccessDeniedError):
            safe_join(root, 'dangling')

    def test_symlink_inside_root_allowed(self, sample_tree):
        """Test symlinks that stay inside root resolve to their target."""
        os.symlink(
            os.path.join(sample_tree, 'docs'),
            os.path.join(sample_tree, 'shortcut'),
        )

        result = safe_join(sample_tree, 'shortcut/report.pdf')

        assert result == os.path.join(sample_tree, 'docs', 'report.pdf')


class TestContainmentHelpers:
    """Tests for is_within and relative_to."""

    def test_is_within_compares_components(self):
        """Test sibling directories sharing a prefix are not contained."""
        assert is_within('/data', '/data')
        assert is_within('/data', '/data/docs')
        assert not is_within('/data', '/data2')
        assert not is_within('/data', '/')

    def test_is_within_mixed_paths(self):
        """Test mixing absolute and relative paths is never contained."""
        assert not is_within('/data', 'data')

    def test_relative_to(self, root):
        """Test paths are expressed relative to root with slashes."""
        nested = str(Path(root) / 'docs' / 'reports')

        assert relative_to(root, nested) == 'docs/reports'
        assert relative_to(root, root) == ''
