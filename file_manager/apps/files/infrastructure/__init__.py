"""Infrastructure layer for files app.

This package contains the code that touches the filesystem directly:
- Path sanitization and root containment
- Extension, category and icon lookups

Keep infrastructure concerns separate from business logic.
"""
