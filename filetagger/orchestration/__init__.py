"""Orchestration package for filetagger.

This package contains the components that tie the layers together:
- TagService: Entry point for listing, matching, renaming and moving.
- ActivityLog: Plain-text audit trail of requests.
"""

from filetagger.orchestration.activity_log import ActivityLog
from filetagger.orchestration.tag_service import TagService

__all__ = ["ActivityLog", "TagService"]
