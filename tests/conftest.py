"""Shared fixtures: keep CI environment of the test runner out of config."""

import pytest

ENV_KEYS = (
    "NOTION_SECRET",
    "NOTION_SECRET_FILE",
    "NOTION_DATABASE_ID",
    "NOTION_API_URL",
    "NOTION_STATUS_PROPERTY",
    "GH_TOKEN",
    "GH_TOKEN_FILE",
    "GH_REPO",
    "GH_API_URL",
    "BRANCH_NAME",
    "PR_NUMBER",
    "PR_URL",
    "LOGGING_LEVEL",
    "LOGGING_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
