"""Description merge and the open/ship flows."""

from notionbot.services.description import build_block, find_block, merge_description
from notionbot.services.open_pull_request import OpenPullRequest, ShipPullRequest, branch_identifier

__all__ = [
    "build_block",
    "find_block",
    "merge_description",
    "OpenPullRequest",
    "ShipPullRequest",
    "branch_identifier",
]
