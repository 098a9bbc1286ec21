"""Configuration loading from YAML and environment.

Secrets (Notion integration secret, GitHub token) are taken from environment
variables or from files (Docker secrets). Never put real tokens in config
files committed to the repo.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so secret resolution can read env/file
_current_env: dict[str, str] = {}


def _is_placeholder(value: str | None) -> bool:
    return not value or value.startswith("${") or value.startswith("your-")


class NotionConfig(BaseSettings):
    """Notion API access and database property names."""

    model_config = SettingsConfigDict(env_prefix="NOTION_", extra="ignore")

    secret: str | None = Field(default=None, description="Integration secret; use env or secret file")
    database_id: str | None = Field(default=None, description="Database holding the notes")
    api_url: str = Field(default="https://api.notion.com/v1", description="API base URL")
    version: str = Field(default="2022-06-28", description="Notion-Version header")
    timeout: int = Field(default=30, ge=1, description="Request timeout in seconds")
    title_property: str = Field(default="Description", description="Title property of a note")
    priority_property: str = Field(default="Priority", description="Select property with priority")
    status_property: str = Field(default="Statut Tech", description="Select property with tech status")
    branch_property: str = Field(default="Branch identifier", description="Formula property matched against branch")
    pr_url_property: str = Field(default="Pr Github", description="URL property receiving the PR link")


class GitHubConfig(BaseSettings):
    """GitHub API settings and target repo."""

    model_config = SettingsConfigDict(env_prefix="GH_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; use env or secret file")
    repo: str | None = Field(default=None, description="Target repo e.g. owner/name")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: int = Field(default=30, ge=1, description="Request timeout in seconds")


class RunConfig(BaseSettings):
    """Values describing the triggering CI event (BRANCH_NAME, PR_NUMBER,
    PR_URL)."""

    model_config = SettingsConfigDict(extra="ignore")

    branch_name: str | None = Field(default=None, description="Pushed branch name")
    pr_number: int | None = Field(default=None, ge=1, description="Pull request number")
    pr_url: str | None = Field(default=None, description="Pull request URL written to the note")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    notion: NotionConfig = Field(default_factory=NotionConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    run: RunConfig = Field(default_factory=RunConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def notion_secret_resolved(self) -> str | None:
        """Resolve Notion secret from config, env or Docker secret file."""
        s = self.notion.secret
        if not _is_placeholder(s):
            return s
        return _read_secret("NOTION_SECRET", "NOTION_SECRET_FILE")

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if not _is_placeholder(t):
            return t
        return _read_secret("GH_TOKEN", "GH_TOKEN_FILE")

    def missing_settings(self, command: str = "open") -> list[str]:
        """Return env keys required by ``command`` that have no value.

        Both commands need Notion access and a branch name; ``open`` also
        writes to the pull request.
        """
        missing = []
        if not self.notion_secret_resolved:
            missing.append("NOTION_SECRET")
        if _is_placeholder(self.notion.database_id):
            missing.append("NOTION_DATABASE_ID")
        if not self.run.branch_name:
            missing.append("BRANCH_NAME")
        if command == "open":
            if not self.github_token_resolved:
                missing.append("GH_TOKEN")
            if _is_placeholder(self.github.repo):
                missing.append("GH_REPO")
            if self.run.pr_number is None:
                missing.append("PR_NUMBER")
            if not self.run.pr_url:
                missing.append("PR_URL")
        return missing


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Without a file every section is read from the environment alone. Values
    in the file win over env; use ``${VAR}`` to pull env values into it.
    Secrets: NOTION_SECRET or NOTION_SECRET_FILE, GH_TOKEN or GH_TOKEN_FILE.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    # Env overrides for values that change on every CI run
    run_raw = raw.get("run") or {}
    for key in ("branch_name", "pr_number", "pr_url"):
        env_value = _current_env.get(key.upper())
        if env_value:
            run_raw = {**run_raw, key: env_value}

    notion = NotionConfig(**(raw.get("notion") or {}))
    github = GitHubConfig(**(raw.get("github") or {}))
    run = RunConfig(**run_raw)
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(
        notion=notion,
        github=github,
        run=run,
        logging=logging,
    )
