"""Business logic layer for files app.

This package contains all business logic for file operations:
- Directory listing, filtering, sorting and breadcrumbs
- Folder creation, delete, upload and download

Every action returns an ActionResult instead of raising, the view
only has to turn it into a status line.
"""
