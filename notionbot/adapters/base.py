"""Abstract bases for the task tracker and Git platform adapters."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from notionbot.models import PR, Note, NoteLookup

STATUS_IN_PROGRESS = "2 - In progress"
STATUS_SHIPPED = "5 - Shipped"


class TrackerError(Exception):
    """Raised when a task tracker API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NoteNotFoundError(TrackerError):
    """Raised when a note fetched by id does not exist."""

    pass


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class TrackerAdapter(ABC):
    """Abstract interface for task trackers holding one note per branch."""

    @abstractmethod
    def get_note(self, note_id: str) -> Note:
        """Fetch note by id."""
        ...

    @abstractmethod
    def find_by_branch_id(self, branch_id: str) -> NoteLookup:
        """Find the note whose branch identifier equals branch_id."""
        ...

    @abstractmethod
    def set_pr_url(self, note_id: str, url: str) -> Dict[str, Any]:
        """Store the pull request link on a note."""
        ...

    @abstractmethod
    def set_status(self, note_id: str, status: str) -> Dict[str, Any]:
        """Set the status of a note."""
        ...

    def set_in_progress(self, note_id: str) -> Dict[str, Any]:
        return self.set_status(note_id, STATUS_IN_PROGRESS)

    def set_shipped(self, note_id: str) -> Dict[str, Any]:
        return self.set_status(note_id, STATUS_SHIPPED)


class GitPlatformAdapter(ABC):
    """Abstract interface for Git hosting platforms."""

    @abstractmethod
    def get_pr(self, repo: str, pr_number: int) -> PR:
        """Fetch PR by number."""
        ...

    @abstractmethod
    def update_pr(self, repo: str, pr_number: int, title: str, body: str) -> PR:
        """Replace title and body of a PR in one call."""
        ...
