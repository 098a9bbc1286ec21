"""Tracker and Git platform adapters (base and implementations)."""

from notionbot.adapters.base import (
    STATUS_IN_PROGRESS,
    STATUS_SHIPPED,
    GitPlatformAdapter,
    GitPlatformError,
    NoteNotFoundError,
    TrackerAdapter,
    TrackerError,
)
from notionbot.adapters.github import GitHubAdapter
from notionbot.adapters.notion import NotionAdapter

__all__ = [
    "STATUS_IN_PROGRESS",
    "STATUS_SHIPPED",
    "GitPlatformAdapter",
    "GitPlatformError",
    "NoteNotFoundError",
    "TrackerAdapter",
    "TrackerError",
    "GitHubAdapter",
    "NotionAdapter",
]
