"""notionbot entry point.

Two commands: open (link the PR and its Notion note, default) and ship (mark
the note shipped). Usage: notionbot [open | ship] [options].
Everything else comes from config.yaml and the CI environment.
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from notionbot.adapters import GitHubAdapter, GitPlatformError, NotionAdapter, TrackerError
from notionbot.config import AppConfig, load_config
from notionbot.logging import NotionbotLogging
from notionbot.models import Found
from notionbot.services import OpenPullRequest, ShipPullRequest

COMMANDS = ("open", "ship")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOTE_MISSING = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI with optional subcommand (open | ship)."""
    argv = argv if argv is not None else sys.argv[1:]
    sub = "open"
    rest = list(argv)
    if argv and not argv[0].startswith("-") and argv[0] in COMMANDS:
        sub = argv[0]
        rest = argv[1:]

    parser = argparse.ArgumentParser(
        prog="notionbot",
        description="notionbot - sync a pull request with its Notion note (open | ship)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--branch",
        "-b",
        default=None,
        help="Branch name (overrides BRANCH_NAME)",
    )
    parser.add_argument(
        "--require-note",
        action="store_true",
        help="Exit with code 2 when no note matches the branch",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parsed = parser.parse_args(rest)
    parsed.subcommand = sub
    return parsed


def build_tracker(config: AppConfig) -> NotionAdapter:
    return NotionAdapter(secret=config.notion_secret_resolved or "", config=config.notion)


def build_platform(config: AppConfig) -> GitHubAdapter:
    return GitHubAdapter(
        token=config.github_token_resolved or "",
        api_url=config.github.api_url,
        timeout=config.github.timeout,
    )


def run(config: AppConfig, command: str) -> bool:
    """Run command against the configured services.

    Returns True when a note matched the branch.
    """
    tracker = build_tracker(config)
    branch_name = config.run.branch_name or ""
    if command == "ship":
        lookup = ShipPullRequest(tracker).perform(branch_name)
    else:
        flow = OpenPullRequest(
            tracker,
            build_platform(config),
            repo=config.github.repo or "",
            pr_number=config.run.pr_number or 0,
            pr_url=config.run.pr_url or "",
        )
        lookup = flow.perform(branch_name)
    return isinstance(lookup, Found)


def main(argv: list[str] | None = None) -> int:
    """Entry point: validate config and dispatch to open or ship."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (ValidationError, yaml.YAMLError) as e:
        logging.basicConfig(level=logging.INFO)
        logging.getLogger("notionbot").error("Invalid configuration: %s", e)
        return EXIT_ERROR
    if args.branch:
        config.run.branch_name = args.branch

    NotionbotLogging(config.logging).setup()
    logger = logging.getLogger("notionbot")

    missing = config.missing_settings(args.subcommand)
    if missing:
        logger.error("Missing settings for %s: %s", args.subcommand, ", ".join(missing))
        return EXIT_ERROR

    if args.check:
        print("Config OK:", config.github.repo or "-", config.run.branch_name)
        return EXIT_OK

    try:
        matched = run(config, args.subcommand)
    except (TrackerError, GitPlatformError) as e:
        logger.exception("%s failed: %s", args.subcommand, e)
        return EXIT_ERROR
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        return EXIT_ERROR

    if not matched and args.require_note:
        return EXIT_NOTE_MISSING
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
