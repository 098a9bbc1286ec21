"""
Sync a Notion note with the pull request opened for its branch.

The branch name ends with the note's branch identifier
(e.g. ``feature-login-form-a1b2`` -> ``a1b2``). On ``open`` the note gets the PR
link and the in-progress status, and the PR gets the note title and a link
block in its description. On ``ship`` the note is marked shipped.

A branch without a matching note is not an error: nothing is changed and a
warning is logged.
"""

import logging

from notionbot.adapters.base import GitPlatformAdapter, TrackerAdapter
from notionbot.models import Found, NoteLookup
from notionbot.services.description import merge_description


def branch_identifier(branch_name: str) -> str:
    """Return the last '-'-separated segment of branch_name."""
    return branch_name.split("-")[-1]


class OpenPullRequest:
    """Link a freshly opened PR and its Notion note both ways."""

    def __init__(
        self,
        tracker: TrackerAdapter,
        platform: GitPlatformAdapter,
        repo: str,
        pr_number: int,
        pr_url: str,
        log: logging.Logger | None = None,
    ) -> None:
        self._tracker = tracker
        self._platform = platform
        self._repo = repo
        self._pr_number = pr_number
        self._pr_url = pr_url
        self._log = log or logging.getLogger("notionbot.services.open_pull_request")

    def perform(self, branch_name: str) -> NoteLookup:
        branch_id = branch_identifier(branch_name)
        self._log.info("Branch %s: looking up note %r", branch_name, branch_id)
        lookup = self._tracker.find_by_branch_id(branch_id)
        if not isinstance(lookup, Found):
            self._log.warning("No note matches branch identifier %r, PR #%s left as is", branch_id, self._pr_number)
            return lookup

        note = lookup.note
        self._tracker.set_pr_url(note.id, self._pr_url)
        self._log.info("Note %s: PR link set to %s", note.id, self._pr_url)
        self._tracker.set_in_progress(note.id)
        self._log.info("Note %s: status set to in progress", note.id)

        pr = self._platform.get_pr(self._repo, self._pr_number)
        body = merge_description(pr.body, note.url)
        self._platform.update_pr(self._repo, self._pr_number, title=note.title, body=body)
        self._log.info("PR #%s: title and description synced with %s", self._pr_number, note.url)
        return lookup


class ShipPullRequest:
    """Mark the note of a merged branch as shipped."""

    def __init__(self, tracker: TrackerAdapter, log: logging.Logger | None = None) -> None:
        self._tracker = tracker
        self._log = log or logging.getLogger("notionbot.services.open_pull_request")

    def perform(self, branch_name: str) -> NoteLookup:
        branch_id = branch_identifier(branch_name)
        lookup = self._tracker.find_by_branch_id(branch_id)
        if not isinstance(lookup, Found):
            self._log.warning("No note matches branch identifier %r, nothing to ship", branch_id)
            return lookup
        self._tracker.set_shipped(lookup.note.id)
        self._log.info("Note %s: status set to shipped", lookup.note.id)
        return lookup
