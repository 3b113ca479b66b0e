"""Web package for filetagger.

Provides the Flask application factory and the HTTP routes for listing
files and folders, matching tags to folders, and renaming or moving files.

Example:
    >>> from filetagger.web import create_app
    >>> app = create_app()
    >>> app.run(port=3000)
"""

from .app import create_app

__all__ = ["create_app"]
